"""
Tournament Sign-up Service

Responsibilities:
- Public entry form and group submission
- Staff login gated by a shared password
- Roster review: search, delete, CSV export
"""
