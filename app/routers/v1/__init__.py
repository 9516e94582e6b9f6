"""v1 router package — all /api/v1/* endpoints live here.

Files:
  people.py  — Person listing (paged, filtered, sorted) and CRUD

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
