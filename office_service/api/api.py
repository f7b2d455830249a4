from fastapi import APIRouter

from office_service.api import auth, employees, leaves

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(leaves.router, prefix="/leave", tags=["leave"])
