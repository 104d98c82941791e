"""
bidboard.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models and engine/session setup for the SQL remote store.
"""

# Package marker.
