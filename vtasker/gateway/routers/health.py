"""
Gateway liveness endpoint.

Routes: GET /health
"""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    return {"status": "healthy", "message": "Gateway Healthy"}
