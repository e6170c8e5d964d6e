"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import audit, auth, dashboard, employees, teams

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
