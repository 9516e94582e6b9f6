"""Request/response plumbing shared by all routers.

Files:
  access_log.py  — per-request access log line
  paging.py      — PagedRoute: turns PageResult returns into a JSON array + X-Meta-Pagination
"""
