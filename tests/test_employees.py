from office_service.schemas.employee import EmployeeUpdate
from office_service.services import employee_service
from office_service.services.employee_service import build_update, format_employee_id


def test_format_employee_id_is_zero_padded():
    assert format_employee_id(1) == "EMP001"
    assert format_employee_id(42) == "EMP042"
    assert format_employee_id(1234) == "EMP1234"


def test_build_update_only_includes_sent_fields():
    payload = EmployeeUpdate.model_validate(
        {"phone": "", "skills": [], "leaveBalance": {"sick": 0}}
    )

    assert build_update(payload) == {"phone": "", "skills": [], "leaveBalance.sick": 0}


def test_build_update_allows_clearing_manager():
    payload = EmployeeUpdate.model_validate({"manager": None})

    assert build_update(payload) == {"manager": None}


def test_create_assigns_sequential_ids_and_defaults(client, admin_headers, create_employee):
    first, _ = create_employee()
    second, _ = create_employee(name="Michael Chen", email="michael.chen@company.com")

    assert first["employeeId"] == "EMP001"
    assert second["employeeId"] == "EMP002"
    assert first["status"] == "Active"
    assert first["performance"] == "Good"
    assert first["leaveBalance"] == {"annual": 20, "sick": 10, "personal": 5}
    assert "password" not in first


def test_create_without_password_has_no_account(client, admin_headers, employee_payload):
    payload = employee_payload()
    payload.pop("password")

    resp = client.post("/api/v1/employees", json=payload, headers=admin_headers)
    assert resp.status_code == 201

    login = client.post(
        "/api/v1/auth/login",
        json={"email": payload["email"], "password": "employee123"},
    )
    assert login.status_code == 401


def test_create_duplicate_email(client, admin_headers, create_employee, employee_payload):
    create_employee()

    resp = client.post(
        "/api/v1/employees",
        json=employee_payload(email="SARAH.johnson@company.com"),
        headers=admin_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"message": "Employee with this email already exists"}


def test_create_missing_required_field(client, admin_headers, employee_payload):
    payload = employee_payload()
    payload.pop("department")

    resp = client.post("/api/v1/employees", json=payload, headers=admin_headers)

    assert resp.status_code == 400
    assert "department" in resp.json()["message"]


def test_list_is_admin_only(client, admin_headers, create_employee):
    _, headers = create_employee()

    assert client.get("/api/v1/employees", headers=admin_headers).status_code == 200
    assert len(client.get("/api/v1/employees", headers=admin_headers).json()) == 1

    resp = client.get("/api/v1/employees", headers=headers)
    assert resp.status_code == 403
    assert resp.json() == {"message": "Access denied. Admin role required"}


def test_employee_reads_own_record_but_not_others(client, create_employee):
    sarah, sarah_headers = create_employee()
    michael, _ = create_employee(name="Michael Chen", email="michael.chen@company.com")

    own = client.get(f"/api/v1/employees/{sarah['id']}", headers=sarah_headers)
    assert own.status_code == 200
    assert own.json()["email"] == "sarah.johnson@company.com"

    other = client.get(f"/api/v1/employees/{michael['id']}", headers=sarah_headers)
    assert other.status_code == 403


def test_get_unknown_employee(client, admin_headers):
    assert client.get("/api/v1/employees/64b7f0c2a1b2c3d4e5f60718", headers=admin_headers).status_code == 404
    assert client.get("/api/v1/employees/not-an-id", headers=admin_headers).status_code == 404


def test_update_is_partial(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={
            "position": "Staff Engineer",
            "emergencyContact": {"phone": "555-000-0000"},
            "leaveBalance": {"annual": 5},
        },
        headers=admin_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["position"] == "Staff Engineer"
    assert body["department"] == "Engineering"
    assert body["emergencyContact"] == {"name": "John Johnson", "phone": "555-000-0000"}
    assert body["leaveBalance"] == {"annual": 5, "sick": 10, "personal": 5}


def test_update_applies_empty_values(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"skills": [], "leaveBalance": {"personal": 0}, "manager": None},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["skills"] == []
    assert body["leaveBalance"]["personal"] == 0
    assert body["manager"] is None


def test_update_rejects_null_for_required_field(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"name": None},
        headers=admin_headers,
    )

    assert resp.status_code == 400


def test_update_rejects_negative_balance(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"leaveBalance": {"sick": -1}},
        headers=admin_headers,
    )

    assert resp.status_code == 400


def test_update_email_moves_login(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"email": "sarah.j@company.com"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["email"] == "sarah.j@company.com"

    old = client.post(
        "/api/v1/auth/login",
        json={"email": "sarah.johnson@company.com", "password": "employee123"},
    )
    new = client.post(
        "/api/v1/auth/login",
        json={"email": "sarah.j@company.com", "password": "employee123"},
    )
    assert old.status_code == 401
    assert new.status_code == 200
    assert new.json()["employee"]["id"] == employee["id"]


def test_update_email_to_taken_address(client, admin_headers, create_employee):
    sarah, _ = create_employee()
    create_employee(name="Michael Chen", email="michael.chen@company.com")

    resp = client.put(
        f"/api/v1/employees/{sarah['id']}",
        json={"email": "michael.chen@company.com"},
        headers=admin_headers,
    )

    assert resp.status_code == 400
    assert client.get(f"/api/v1/employees/{sarah['id']}", headers=admin_headers).json()["email"] == (
        "sarah.johnson@company.com"
    )


def test_update_is_admin_only(client, create_employee):
    employee, headers = create_employee()

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"leaveBalance": {"annual": 99}},
        headers=headers,
    )

    assert resp.status_code == 403


def test_update_unknown_employee(client, admin_headers):
    resp = client.put(
        "/api/v1/employees/64b7f0c2a1b2c3d4e5f60718",
        json={"name": "Ghost"},
        headers=admin_headers,
    )

    assert resp.status_code == 404


def test_delete_removes_account(client, admin_headers, create_employee):
    employee, _ = create_employee()

    resp = client.delete(f"/api/v1/employees/{employee['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Employee removed"}

    assert client.get(f"/api/v1/employees/{employee['id']}", headers=admin_headers).status_code == 404
    login = client.post(
        "/api/v1/auth/login",
        json={"email": "sarah.johnson@company.com", "password": "employee123"},
    )
    assert login.status_code == 401


def test_delete_unknown_employee(client, admin_headers):
    resp = client.delete("/api/v1/employees/64b7f0c2a1b2c3d4e5f60718", headers=admin_headers)

    assert resp.status_code == 404
    assert resp.json() == {"message": "Employee not found"}


def test_create_rejects_malformed_email(client, admin_headers, employee_payload):
    resp = client.post(
        "/api/v1/employees",
        json=employee_payload(email="sarah.johnson@"),
        headers=admin_headers,
    )

    assert resp.status_code == 400
    assert "email" in resp.json()["message"]


def test_create_and_update_trim_text_fields(client, admin_headers, create_employee):
    employee, _ = create_employee(
        name="  Sarah Johnson ",
        department=" Engineering ",
        manager=" David Miller ",
        emergencyContact={"name": " John Johnson ", "phone": " 555-987-6543 "},
    )

    assert employee["name"] == "Sarah Johnson"
    assert employee["department"] == "Engineering"
    assert employee["manager"] == "David Miller"
    assert employee["emergencyContact"] == {"name": "John Johnson", "phone": "555-987-6543"}

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"position": " Staff Engineer  ", "emergencyContact": {"phone": " 555-000-0000 "}},
        headers=admin_headers,
    )
    assert resp.json()["position"] == "Staff Engineer"
    assert resp.json()["emergencyContact"]["phone"] == "555-000-0000"


def test_create_rejects_blank_name(client, admin_headers, employee_payload):
    resp = client.post("/api/v1/employees", json=employee_payload(name="   "), headers=admin_headers)

    assert resp.status_code == 400


def test_email_change_losing_to_concurrent_create_keeps_login(
    client, admin_headers, create_employee, db, monkeypatch
):
    employee, _ = create_employee()
    moves = []
    original_move = employee_service._move_account_email

    async def move_then_collide(db_, employee_oid, email):
        await original_move(db_, employee_oid, email)
        if not moves:
            # 계정 이메일을 옮긴 직후 같은 이메일의 직원이 먼저 생성된 상황
            await db_["employees"].create_index("email", unique=True)
            await db_["employees"].insert_one({"name": "Other", "email": email})
        moves.append(email)

    monkeypatch.setattr(employee_service, "_move_account_email", move_then_collide)

    resp = client.put(
        f"/api/v1/employees/{employee['id']}",
        json={"email": "taken@company.com"},
        headers=admin_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"message": "Duplicate field value entered"}
    assert moves == ["taken@company.com", "sarah.johnson@company.com"]
    login = client.post(
        "/api/v1/auth/login",
        json={"email": "sarah.johnson@company.com", "password": "employee123"},
    )
    assert login.status_code == 200
    stored = client.get(f"/api/v1/employees/{employee['id']}", headers=admin_headers).json()
    assert stored["email"] == "sarah.johnson@company.com"
