"""
Todo API service.

Issues API keys to username/password accounts and serves per-user todo items
to callers identified by those keys.
"""

__version__ = "1.0.0"
