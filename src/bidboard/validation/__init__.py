"""
bidboard.validation

Form validation package.

Responsibilities:
- Declare the sign-up, sign-in and listing schemas.
- Turn a raw payload into either a typed form or the first violation message.
"""

# Package marker.
