"""
bidboard.provisioning

Account provisioning package (LangGraph state machine).

Responsibilities:
- Typed provisioning state, transition nodes, routing, and graph compilation.
- The `AccountProvisioner` entry point returning `Result[Profile, ProvisionError]`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should use `AccountProvisioner.provision`; nodes are public for isolated tests.
