"""
bidboard.admin

Administrative raw-row viewer.

Responsibilities:
- Track per-table row selections (`selection`).
- Describe and commit pending deletions (`mutations`, `executor`).
- Hold one viewer session per admin principal (`viewer`).
"""

# Package marker.
