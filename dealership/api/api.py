from fastapi import APIRouter

from dealership.api.endpoints import auth, dashboard, health, inquiries, upload, vehicles

# Every route below is mounted under API_PREFIX
api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vehicles.router, prefix="/vehiculos", tags=["vehicles"])
api_router.include_router(inquiries.router, prefix="/consultas", tags=["inquiries"])
api_router.include_router(upload.router, prefix="/upload", tags=["images"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
