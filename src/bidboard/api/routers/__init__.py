"""
bidboard.api.routers

HTTP routers (health, dev tokens, accounts, listings, admin viewer).
"""

# Package marker.
