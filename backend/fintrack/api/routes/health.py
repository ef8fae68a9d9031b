"""
Health check route.
"""
from fastapi import APIRouter
from fintrack.core.utils import utc_timestamp

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "OK", "timestamp": utc_timestamp()}
