"""
bidboard.store

Remote store package.

Responsibilities:
- Define the RemoteStore capability consumed by provisioning, the admin viewer and services.
- Provide SQL (SQLAlchemy async) and HTTP (PostgREST/GoTrue style) implementations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Orchestrators should depend on `store.base.RemoteStore` only, never on a concrete adapter.
