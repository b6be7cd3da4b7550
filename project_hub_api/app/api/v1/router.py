"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified
prefix.  When new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import events, incidents, messages, projects

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(incidents.router, prefix="/incidents", tags=["incidents"])
# Message routes are nested under a chat and declare their own paths.
router.include_router(messages.router, tags=["messages"])
