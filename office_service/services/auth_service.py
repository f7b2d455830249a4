import logging
from datetime import datetime
from typing import Optional

import jwt
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from office_service.core.db import EMPLOYEES, USERS
from office_service.core.documents import serialize_document
from office_service.core.errors import ConflictError, NotFoundError, UnauthorizedError
from office_service.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from office_service.schemas.auth import Caller, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


def is_admin(caller: Caller) -> bool:
    return caller.role == "admin"


def is_employee_or_admin(caller: Caller) -> bool:
    return caller.role in ("employee", "admin")


def can_access_employee(caller: Caller, employee_id: str) -> bool:
    """관리자이거나, 해당 직원 본인과 연결된 계정인지."""
    if is_admin(caller):
        return True
    return (
        caller.role == "employee"
        and caller.employeeId is not None
        and caller.employeeId == employee_id
    )


async def _linked_employee(db: AsyncIOMotorDatabase, user: dict) -> Optional[dict]:
    if user.get("role") != "employee" or not user.get("employeeId"):
        return None
    employee = await db[EMPLOYEES].find_one({"_id": user["employeeId"]})
    return serialize_document(employee) if employee else None


async def register(db: AsyncIOMotorDatabase, payload: RegisterRequest) -> dict:
    if await db[USERS].find_one({"email": payload.email}):
        raise ConflictError("User already exists")

    now = datetime.utcnow()
    doc = {
        "email": payload.email,
        "password": get_password_hash(payload.password),
        "role": payload.role,
        "employeeId": None,
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db[USERS].insert_one(doc)
    user_id = str(result.inserted_id)
    logger.info("Registered %s account %s", payload.role, payload.email)

    return {
        "id": user_id,
        "email": payload.email,
        "role": payload.role,
        "token": create_access_token(user_id),
    }


async def login(db: AsyncIOMotorDatabase, payload: LoginRequest) -> dict:
    user = await db[USERS].find_one({"email": payload.email})
    if not user or not verify_password(payload.password, user["password"]):
        raise UnauthorizedError("Invalid email or password")

    user_id = str(user["_id"])
    return {
        "id": user_id,
        "email": user["email"],
        "role": user["role"],
        "employee": await _linked_employee(db, user),
        "token": create_access_token(user_id),
    }


async def authenticate(db: AsyncIOMotorDatabase, token: Optional[str]) -> Caller:
    """
    Bearer 토큰 -> Caller.
    토큰 없음 / 서명·만료 오류 / 계정 삭제됨 -> 모두 401.
    """
    if not token:
        raise UnauthorizedError("No authentication token, access denied")

    try:
        user_id = ObjectId(decode_access_token(token))
    except (jwt.InvalidTokenError, InvalidId):
        raise UnauthorizedError("Token is invalid or expired")

    user = await db[USERS].find_one({"_id": user_id})
    if not user:
        raise UnauthorizedError("User not found")

    employee_id = user.get("employeeId")
    return Caller(
        id=str(user["_id"]),
        email=user["email"],
        role=user["role"],
        employeeId=str(employee_id) if employee_id else None,
    )


async def get_profile(db: AsyncIOMotorDatabase, caller: Caller) -> dict:
    user = await db[USERS].find_one({"_id": ObjectId(caller.id)})
    if not user:
        raise NotFoundError("User not found")

    return {
        "id": str(user["_id"]),
        "email": user["email"],
        "role": user["role"],
        "employee": await _linked_employee(db, user),
    }
