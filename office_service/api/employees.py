from typing import List

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from office_service.core.db import get_database
from office_service.core.deps import require_admin, require_employee_or_admin
from office_service.schemas.auth import Caller
from office_service.schemas.common import MessageResponse
from office_service.schemas.employee import (
    Employee as EmployeeSchema,
    EmployeeCreate,
    EmployeeUpdate,
)
from office_service.services import employee_service

router = APIRouter()


@router.get(
    "",
    response_model=List[EmployeeSchema],
    dependencies=[Depends(require_admin)],
)
async def list_employees(
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await employee_service.list_employees(db)


@router.get(
    "/{employee_id}",
    response_model=EmployeeSchema,
)
async def get_employee(
    employee_id: str,
    caller: Caller = Depends(require_employee_or_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    # 관리자이거나 본인일 때만 (서비스에서 확인)
    return await employee_service.get_employee(db, employee_id, caller)


@router.post(
    "",
    response_model=EmployeeSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_employee(
    payload: EmployeeCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await employee_service.create_employee(db, payload)


@router.put(
    "/{employee_id}",
    response_model=EmployeeSchema,
    dependencies=[Depends(require_admin)],
)
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await employee_service.update_employee(db, employee_id, payload)


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_employee(
    employee_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    await employee_service.delete_employee(db, employee_id)
    return {"message": "Employee removed"}
