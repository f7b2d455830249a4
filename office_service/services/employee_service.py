import logging
from datetime import datetime
from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from office_service.core.db import COUNTERS, EMPLOYEES, USERS
from office_service.core.documents import parse_object_id, serialize_document
from office_service.core.errors import ConflictError, ForbiddenError, NotFoundError
from office_service.core.security import get_password_hash
from office_service.schemas.auth import Caller
from office_service.schemas.employee import EmployeeCreate, EmployeeUpdate
from office_service.services.auth_service import can_access_employee

logger = logging.getLogger(__name__)

EMPLOYEE_COUNTER_ID = "employee_id"

# leaveBalance / emergencyContact는 통째로 바꾸지 않고 필드 단위로 병합한다.
MERGED_FIELDS = ("leaveBalance", "emergencyContact")


def format_employee_id(seq: int) -> str:
    return f"EMP{seq:03d}"


async def _get_next_employee_seq(db: AsyncIOMotorDatabase) -> int:
    """Atomic하게 employee 번호 증가.
    counters 컬렉션에 {_id: 'employee_id', seq: N} 형태로 저장 후 $inc.
    count()+1 방식과 달리 동시 생성에도 번호가 겹치지 않는다.
    """
    counter = await db[COUNTERS].find_one_and_update(
        {"_id": EMPLOYEE_COUNTER_ID},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(counter["seq"])


async def list_employees(db: AsyncIOMotorDatabase) -> List[dict]:
    cursor = db[EMPLOYEES].find({})
    docs = await cursor.to_list(length=None)
    return [serialize_document(doc) for doc in docs]


async def get_employee(
    db: AsyncIOMotorDatabase,
    employee_id: str,
    caller: Caller,
) -> dict:
    oid = parse_object_id(employee_id, "Employee not found")
    employee = await db[EMPLOYEES].find_one({"_id": oid})
    if employee is None:
        raise NotFoundError("Employee not found")

    if not can_access_employee(caller, str(employee["_id"])):
        raise ForbiddenError("Not authorized to access this employee data")

    return serialize_document(employee)


async def create_employee(db: AsyncIOMotorDatabase, payload: EmployeeCreate) -> dict:
    """
    직원 생성 흐름:
    1) 이메일 중복 검사 (직원, 그리고 password가 있으면 로그인 계정까지)
    2) counters에서 employeeId 발급
    3) employees에 저장
    4) password가 있으면 users에 employee 계정 생성 (실패하면 직원 문서 롤백)
    """
    if await db[EMPLOYEES].find_one({"email": payload.email}):
        raise ConflictError("Employee with this email already exists")
    if payload.password and await db[USERS].find_one({"email": payload.email}):
        raise ConflictError("User already exists")

    seq = await _get_next_employee_seq(db)
    now = datetime.utcnow()

    doc = payload.model_dump(exclude={"password"})
    doc.update(
        employeeId=format_employee_id(seq),
        joinDate=payload.joinDate.isoformat(),
        createdAt=now,
        updatedAt=now,
    )
    result = await db[EMPLOYEES].insert_one(doc)

    if payload.password:
        try:
            await db[USERS].insert_one({
                "email": payload.email,
                "password": get_password_hash(payload.password),
                "role": "employee",
                "employeeId": result.inserted_id,
                "createdAt": now,
                "updatedAt": now,
            })
        except Exception:
            await db[EMPLOYEES].delete_one({"_id": result.inserted_id})
            raise

    logger.info("Created employee %s (%s)", doc["employeeId"], payload.email)
    created = await db[EMPLOYEES].find_one({"_id": result.inserted_id})
    return serialize_document(created)


async def _move_account_email(
    db: AsyncIOMotorDatabase,
    employee_oid: ObjectId,
    email: str,
) -> None:
    await db[USERS].update_one(
        {"employeeId": employee_oid},
        {"$set": {"email": email, "updatedAt": datetime.utcnow()}},
    )


def build_update(payload: EmployeeUpdate) -> dict:
    """
    EmployeeUpdate -> MongoDB $set 문서.
    요청에 실제로 들어온 필드만 포함한다. 병합 대상은 "leaveBalance.sick" 같은
    점 표기 경로로 펼친다. email은 계정 동기화 때문에 따로 처리하므로 제외.
    """
    changes = payload.model_dump(exclude_unset=True, exclude={"email"})
    update = {}
    for field, value in changes.items():
        if field in MERGED_FIELDS:
            for sub_field, sub_value in value.items():
                update[f"{field}.{sub_field}"] = sub_value
        else:
            update[field] = value
    return update


async def update_employee(
    db: AsyncIOMotorDatabase,
    employee_id: str,
    payload: EmployeeUpdate,
) -> dict:
    oid = parse_object_id(employee_id, "Employee not found")
    employee = await db[EMPLOYEES].find_one({"_id": oid})
    if employee is None:
        raise NotFoundError("Employee not found")

    update = build_update(payload)

    new_email = payload.email if "email" in payload.model_fields_set else None
    if new_email is not None and new_email != employee["email"]:
        if await db[EMPLOYEES].find_one({"email": new_email, "_id": {"$ne": oid}}):
            raise ConflictError("Employee with this email already exists")
        if await db[USERS].find_one({"email": new_email, "employeeId": {"$ne": oid}}):
            raise ConflictError("User already exists")

        # 로그인 계정 이메일을 먼저 바꾸고, 그 다음 직원 이메일을 바꾼다.
        await _move_account_email(db, oid, new_email)
        update["email"] = new_email

    update["updatedAt"] = datetime.utcnow()
    try:
        updated = await db[EMPLOYEES].find_one_and_update(
            {"_id": oid},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        # 사이에 같은 이메일의 직원이 생겼으면 계정 이메일을 원래대로 돌린다
        if "email" in update:
            await _move_account_email(db, oid, employee["email"])
        raise
    if updated is None:
        raise NotFoundError("Employee not found")

    return serialize_document(updated)


async def delete_employee(db: AsyncIOMotorDatabase, employee_id: str) -> None:
    oid = parse_object_id(employee_id, "Employee not found")
    employee = await db[EMPLOYEES].find_one({"_id": oid})
    if employee is None:
        raise NotFoundError("Employee not found")

    # 연결된 로그인 계정 먼저 삭제
    await db[USERS].delete_one({"employeeId": oid})
    await db[EMPLOYEES].delete_one({"_id": oid})
    logger.info("Deleted employee %s and its account", employee.get("employeeId"))
