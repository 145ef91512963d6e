"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import reading

router = APIRouter()

# Book reading: navigation, search, history and settings
router.include_router(reading.router, tags=["reading"])
