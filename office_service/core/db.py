import logging
from typing import AsyncGenerator

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from office_service.core.config import settings

logger = logging.getLogger(__name__)

EMPLOYEES = "employees"
USERS = "users"
LEAVES = "leaves"
COUNTERS = "counters"

_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    """
    싱글톤 패턴으로 MongoDB 클라이언트 생성.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGODB_URI)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    return get_client()[settings.MONGODB_DB_NAME]


async def get_database() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    FastAPI 의존성 주입용.
    """
    yield get_db()


async def init_db(db: AsyncIOMotorDatabase) -> None:
    """
    애플리케이션 시작 시 한 번 호출해서 unique 인덱스 등을 생성.
    이미 있으면 아무 일도 안 함.
    """
    await db[EMPLOYEES].create_index([("email", ASCENDING)], unique=True)
    await db[EMPLOYEES].create_index([("employeeId", ASCENDING)], unique=True)
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    await db[USERS].create_index([("employeeId", ASCENDING)])
    await db[LEAVES].create_index([("employee", ASCENDING)])
    logger.info("MongoDB indexes ensured on database %s", db.name)


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
