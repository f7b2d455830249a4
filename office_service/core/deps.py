from typing import Optional

from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase

from office_service.core.db import get_database
from office_service.core.errors import ForbiddenError
from office_service.schemas.auth import Caller
from office_service.services.auth_service import (
    authenticate,
    is_admin,
    is_employee_or_admin,
)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Caller:
    """
    Authorization: Bearer <token> 헤더로 현재 요청자를 확인.
    결과 Caller는 핸들러 인자로 받아서 서비스 함수에 명시적으로 넘긴다.
    """
    return await authenticate(db, _bearer_token(authorization))


async def require_admin(caller: Caller = Depends(get_current_user)) -> Caller:
    if not is_admin(caller):
        raise ForbiddenError("Access denied. Admin role required")
    return caller


async def require_employee_or_admin(caller: Caller = Depends(get_current_user)) -> Caller:
    if not is_employee_or_admin(caller):
        raise ForbiddenError("Access denied. Employee or admin role required")
    return caller
