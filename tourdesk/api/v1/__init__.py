"""Versioned API router."""

from fastapi import APIRouter

from . import (
    blocks,
    bookings,
    guests,
    health,
    pricing,
    reference,
    runs,
    tours,
    vehicles,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
router.include_router(tours.router, tags=["tours"])
router.include_router(reference.router, tags=["reference"])
router.include_router(guests.router, prefix="/guests", tags=["guests"])
router.include_router(runs.router, prefix="/runs", tags=["runs"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(blocks.router, prefix="/blocks", tags=["blocks"])
router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
