from typing import List

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from office_service.core.db import get_database
from office_service.core.deps import require_admin, require_employee_or_admin
from office_service.schemas.auth import Caller
from office_service.schemas.common import MessageResponse
from office_service.schemas.leave import (
    LeaveCreate,
    LeaveRecordDetail,
    LeaveRecordRead,
    LeaveStatusUpdate,
)
from office_service.services import leave_service

router = APIRouter()


@router.get(
    "",
    response_model=List[LeaveRecordDetail],
    dependencies=[Depends(require_admin)],
)
async def list_leaves(
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    모든 연차 신청 목록 (직원 이름/사번/부서, 승인자 이메일 포함)
    """
    return await leave_service.list_leaves(db)


@router.get(
    "/employee/{employee_id}",
    response_model=List[LeaveRecordRead],
)
async def list_employee_leaves(
    employee_id: str,
    caller: Caller = Depends(require_employee_or_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    특정 직원의 연차 신청 목록 (최신순). 관리자 또는 본인만.
    """
    return await leave_service.list_employee_leaves(db, employee_id, caller)


@router.post(
    "",
    response_model=LeaveRecordRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_leave(
    payload: LeaveCreate,
    caller: Caller = Depends(require_employee_or_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await leave_service.create_leave(db, caller, payload)


@router.put(
    "/{leave_id}",
    response_model=LeaveRecordRead,
)
async def update_leave_status(
    leave_id: str,
    payload: LeaveStatusUpdate,
    caller: Caller = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await leave_service.update_leave_status(db, leave_id, payload.status, caller)


@router.delete(
    "/{leave_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_leave(
    leave_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    await leave_service.delete_leave(db, leave_id)
    return {"message": "Leave request removed"}
