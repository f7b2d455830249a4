import logging
from datetime import date, datetime
from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from office_service.core.db import EMPLOYEES, LEAVES, USERS
from office_service.core.documents import parse_object_id, serialize_document
from office_service.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from office_service.schemas.auth import Caller
from office_service.schemas.leave import LEAVE_BUCKETS, LeaveCreate
from office_service.services.auth_service import can_access_employee

logger = logging.getLogger(__name__)

PENDING = "Pending"
APPROVED = "Approved"
REJECTED = "Rejected"


def calculate_days(start_date: date, end_date: date) -> int:
    """시작일과 종료일을 모두 포함한 일수. 항상 1 이상."""
    return abs((end_date - start_date).days) + 1


async def create_leave(
    db: AsyncIOMotorDatabase,
    caller: Caller,
    payload: LeaveCreate,
) -> dict:
    """
    연차 신청. 잔여 일수 검사는 하지 않고 승인 시점에만 한다.
    """
    if not caller.employeeId:
        raise BadRequestError("Employee ID not found")

    employee_oid = ObjectId(caller.employeeId)
    if not await db[EMPLOYEES].find_one({"_id": employee_oid}, {"_id": 1}):
        raise NotFoundError("Employee not found")

    now = datetime.utcnow()
    doc = {
        "employee": employee_oid,
        "type": payload.type,
        "startDate": payload.startDate.isoformat(),
        "endDate": payload.endDate.isoformat(),
        "days": calculate_days(payload.startDate, payload.endDate),
        "reason": payload.reason,
        "status": PENDING,
        "approvedBy": None,
        "approvedAt": None,
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db[LEAVES].insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_document(doc)


async def list_leaves(db: AsyncIOMotorDatabase) -> List[dict]:
    """
    모든 연차 신청 + 신청 직원 / 승인자 정보 조인.
    """
    docs = await db[LEAVES].find({}).to_list(length=None)

    employee_ids = list({doc["employee"] for doc in docs})
    approver_ids = list({doc["approvedBy"] for doc in docs if doc.get("approvedBy")})

    employees = {}
    if employee_ids:
        cursor = db[EMPLOYEES].find(
            {"_id": {"$in": employee_ids}},
            {"name": 1, "employeeId": 1, "department": 1},
        )
        employees = {e["_id"]: serialize_document(e) for e in await cursor.to_list(length=None)}

    approvers = {}
    if approver_ids:
        cursor = db[USERS].find({"_id": {"$in": approver_ids}}, {"email": 1})
        approvers = {u["_id"]: serialize_document(u) for u in await cursor.to_list(length=None)}

    leaves = []
    for doc in docs:
        data = serialize_document(doc)
        data["employee"] = employees.get(doc["employee"])
        data["approvedBy"] = approvers.get(doc.get("approvedBy"))
        leaves.append(data)
    return leaves


async def list_employee_leaves(
    db: AsyncIOMotorDatabase,
    employee_id: str,
    caller: Caller,
) -> List[dict]:
    if not can_access_employee(caller, employee_id):
        raise ForbiddenError("Not authorized to access this data")

    oid = parse_object_id(employee_id, "Employee not found")
    cursor = db[LEAVES].find({"employee": oid}, sort=[("createdAt", DESCENDING)])
    return [serialize_document(doc) for doc in await cursor.to_list(length=None)]


async def _withdraw_balance(
    db: AsyncIOMotorDatabase,
    employee_oid: ObjectId,
    bucket: str,
    days: int,
) -> None:
    """
    잔여 일수가 충분할 때만 차감하는 단일 조건부 업데이트.
    조회 후 차감하는 두 단계가 아니므로 동시 승인에도 음수가 되지 않는다.
    """
    field = f"leaveBalance.{bucket}"
    updated = await db[EMPLOYEES].find_one_and_update(
        {"_id": employee_oid, field: {"$gte": days}},
        {"$inc": {field: -days}, "$set": {"updatedAt": datetime.utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is not None:
        return

    if not await db[EMPLOYEES].find_one({"_id": employee_oid}, {"_id": 1}):
        raise NotFoundError("Employee not found")
    raise BadRequestError("Employee does not have enough leave balance")


async def _refund_balance(
    db: AsyncIOMotorDatabase,
    employee_oid: ObjectId,
    bucket: str,
    days: int,
) -> None:
    await db[EMPLOYEES].update_one(
        {"_id": employee_oid},
        {"$inc": {f"leaveBalance.{bucket}": days}},
    )


async def update_leave_status(
    db: AsyncIOMotorDatabase,
    leave_id: str,
    new_status: str,
    caller: Caller,
) -> dict:
    """
    연차 승인/반려 (관리자 전용).

    1) Pending 상태가 아니면 Conflict (한 번만 전이 가능)
    2) Approved면 잔여 일수를 먼저 차감 (실패 시 요청은 Pending 그대로)
    3) status가 여전히 Pending인 경우에만 상태/승인자/승인시각 저장
    4) 3)에서 다른 요청이 먼저 처리했다면 차감한 일수를 되돌리고 Conflict
    """
    oid = parse_object_id(leave_id, "Leave request not found")
    leave = await db[LEAVES].find_one({"_id": oid})
    if leave is None:
        raise NotFoundError("Leave request not found")

    if leave["status"] != PENDING:
        raise ConflictError(f"Leave request has already been {leave['status'].lower()}")

    bucket = None
    if new_status == APPROVED:
        bucket = LEAVE_BUCKETS[leave["type"]]
        await _withdraw_balance(db, leave["employee"], bucket, leave["days"])

    now = datetime.utcnow()
    updated = await db[LEAVES].find_one_and_update(
        {"_id": oid, "status": PENDING},
        {
            "$set": {
                "status": new_status,
                "approvedBy": ObjectId(caller.id),
                "approvedAt": now,
                "updatedAt": now,
            }
        },
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        if bucket is not None:
            await _refund_balance(db, leave["employee"], bucket, leave["days"])
        raise ConflictError("Leave request has already been processed")

    logger.info(
        "Leave %s %s by %s (%s days, %s)",
        leave_id,
        new_status.lower(),
        caller.email,
        leave["days"],
        leave["type"],
    )
    return serialize_document(updated)


async def delete_leave(db: AsyncIOMotorDatabase, leave_id: str) -> None:
    oid = parse_object_id(leave_id, "Leave request not found")
    leave = await db[LEAVES].find_one({"_id": oid})
    if leave is None:
        raise NotFoundError("Leave request not found")

    if leave["status"] != PENDING:
        raise BadRequestError("Cannot delete approved or rejected leave requests")

    # 조회와 삭제 사이에 승인된 경우를 막기 위해 status 조건을 같이 건다
    result = await db[LEAVES].delete_one({"_id": oid, "status": PENDING})
    if result.deleted_count == 0:
        raise BadRequestError("Cannot delete approved or rejected leave requests")
