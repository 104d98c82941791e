"""
bidboard.auth

Authentication/authorization package.

Responsibilities:
- JWT session tokens and password hashing.
- FastAPI auth dependencies (Principal + RBAC).
- The administrative gate (`AdminAuthenticator`).
"""

# Package marker.
