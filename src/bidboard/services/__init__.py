"""
bidboard.services

Service-layer package.

Responsibilities:
- Run validation ahead of every remote call.
- Compose the provisioner, the remote store and token issuing for the API layer.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake stores.
