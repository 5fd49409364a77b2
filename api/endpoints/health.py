"""
Meal Planner Health Check Endpoints
"""

from fastapi import APIRouter
import time

from core.config import settings

router = APIRouter()


@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "ai_enhancement_enabled": settings.AI_ENHANCEMENT_ENABLED,
        "timestamp": time.time()
    }


@router.get("/live")
async def liveness_check():
    """Kubernetes liveness probe endpoint"""
    return {"status": "alive"}
