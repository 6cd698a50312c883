from fastapi import APIRouter

from app.api.v1.routes import groups, health, roster

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(roster.router, prefix="/roster", tags=["roster"])
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
