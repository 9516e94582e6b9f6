"""Services package — all business logic lives here, never in routers.

Files:
  paging.py  — paged query executor shared by every list endpoint
  person.py  — Person CRUD + listing

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
