"""Pydantic schemas package.

Folder intent:
  common.py  — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  person.py  — Person request DTOs and response model
"""
