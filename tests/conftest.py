import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from office_service.core.db import get_database
from office_service.main import app

ADMIN_EMAIL = "admin@company.com"
ADMIN_PASSWORD = "admin123"
EMPLOYEE_PASSWORD = "employee123"


@pytest.fixture
def db():
    # 테스트마다 새 DB 이름을 써서 데이터가 섞이지 않게 한다
    return AsyncMongoMockClient()[f"office_test_{uuid4().hex}"]


@pytest.fixture
def client(db):
    async def override_database():
        yield db

    app.dependency_overrides[get_database] = override_database
    # with 블록 없이 만들어서 lifespan(실제 MongoDB 연결)은 타지 않는다
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "role": "admin"},
    )
    assert resp.status_code == 201
    return bearer(resp.json()["token"])


@pytest.fixture
def employee_payload():
    def _build(**overrides):
        payload = {
            "name": "Sarah Johnson",
            "email": "sarah.johnson@company.com",
            "phone": "555-123-4567",
            "address": "123 Main St, Anytown, CA 12345",
            "department": "Engineering",
            "position": "Senior Developer",
            "joinDate": "2021-05-12",
            "salary": "$95,000",
            "manager": "David Miller",
            "emergencyContact": {"name": "John Johnson", "phone": "555-987-6543"},
            "skills": ["Python", "MongoDB"],
            "projects": ["Website Redesign"],
            "password": EMPLOYEE_PASSWORD,
        }
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture
def create_employee(client, admin_headers, employee_payload):
    """직원 + 로그인 계정을 만들고 (직원 JSON, 해당 직원 토큰 헤더)를 돌려준다."""

    def _create(**overrides):
        payload = employee_payload(**overrides)
        resp = client.post("/api/v1/employees", json=payload, headers=admin_headers)
        assert resp.status_code == 201, resp.json()
        employee = resp.json()

        headers = None
        if payload.get("password"):
            login = client.post(
                "/api/v1/auth/login",
                json={"email": payload["email"], "password": payload["password"]},
            )
            assert login.status_code == 200
            headers = bearer(login.json()["token"])
        return employee, headers

    return _create
