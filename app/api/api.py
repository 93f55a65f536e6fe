from fastapi import APIRouter
from app.api.endpoints import seed, analytics

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(seed.router, tags=["seed"])
api_router.include_router(analytics.router, tags=["analytics"])
