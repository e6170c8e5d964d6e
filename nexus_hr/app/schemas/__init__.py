"""
Pydantic schemas shared by the services and the HTTP layer.

Attributes use snake_case; records are persisted and exchanged over
HTTP with the camelCase aliases (``orgId``, ``jobTitle``...).
"""
