from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from office_service.core.db import get_database
from office_service.core.deps import get_current_user
from office_service.schemas.auth import (
    Caller,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
)
from office_service.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await auth_service.register(db, payload)


@router.post(
    "/login",
    response_model=LoginResponse,
)
async def login(
    payload: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await auth_service.login(db, payload)


@router.get(
    "/profile",
    response_model=ProfileResponse,
)
async def get_profile(
    caller: Caller = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await auth_service.get_profile(db, caller)
