"""Domain package — all ORM models are imported here so create_all sees them.

Folder intent:
  person.py  — the Person entity served by /api/v1/people
  mixins.py  — shared TimestampMixin
"""

from app.domain.person import Person

__all__ = ["Person"]
