from fastapi.testclient import TestClient
from hr_api import main
from hr_api.asgi import app

client = TestClient(app)


def _employee(department_id, email="a@b.com"):
    return {
        "firstName": "A",
        "lastName": "B",
        "email": email,
        "position": "Eng",
        "hireDate": "2023-01-01",
        "departmentId": department_id,
    }


def test_department_lifecycle_with_delete_guard():
    response = client.post("/api/departments", json={"name": "Engineering", "budget": 100000})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Department created successfully"
    dept = body["data"]
    assert isinstance(dept["id"], int) and dept["id"] > 0
    assert dept["budget"] == "100000.00"
    assert dept["description"] is None
    assert "createdAt" in dept and "updatedAt" in dept
    assert "employees" not in dept

    response = client.post("/api/employees", json=_employee(dept["id"]))
    assert response.status_code == 201
    employee_id = response.json()["data"]["id"]

    response = client.delete(f"/api/departments/{dept['id']}")
    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert "1 employee" in body["message"]
    assert "1 employee" in body["error"]

    # Nothing was touched by the refused delete
    assert client.get(f"/api/departments/{dept['id']}").status_code == 200
    assert client.get(f"/api/employees/{employee_id}").status_code == 200

    assert client.delete(f"/api/employees/{employee_id}").status_code == 200
    response = client.delete(f"/api/departments/{dept['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Department deleted successfully"}

    assert client.get(f"/api/departments/{dept['id']}").status_code == 404


def test_list_departments():
    client.post("/api/departments", json={"name": "First"})
    client.post("/api/departments", json={"name": "Second"})

    response = client.get("/api/departments")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    # Newest first
    assert [d["name"] for d in body["data"]] == ["Second", "First"]
    assert all("employees" not in d for d in body["data"])


def test_include_employees_returns_each_employee():
    dept_id = client.post("/api/departments", json={"name": "Engineering"}).json()["data"]["id"]
    other_id = client.post("/api/departments", json={"name": "Sales"}).json()["data"]["id"]
    created = []
    for i in range(3):
        response = client.post("/api/employees", json=_employee(dept_id, email=f"dev{i}@corp.com"))
        created.append(response.json()["data"])

    response = client.get("/api/departments", params={"include": "employees"})
    assert response.status_code == 200
    by_id = {d["id"]: d for d in response.json()["data"]}
    assert by_id[other_id]["employees"] == []

    employees = by_id[dept_id]["employees"]
    assert len(employees) == 3
    assert {e["email"] for e in employees} == {e["email"] for e in created}
    for emp in employees:
        assert set(emp) == {"id", "firstName", "lastName", "email", "position", "salary", "hireDate"}
        assert emp["hireDate"] == "2023-01-01"


def test_get_department_includes_employees():
    dept_id = client.post("/api/departments", json={"name": "Engineering"}).json()["data"]["id"]
    client.post("/api/employees", json=_employee(dept_id))

    response = client.get(f"/api/departments/{dept_id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Engineering"
    assert [e["email"] for e in data["employees"]] == ["a@b.com"]


def test_get_missing_department():
    response = client.get("/api/departments/9999")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Department not found"}


def test_create_department_validation_error():
    response = client.post("/api/departments", json={"budget": -10})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert {e["field"] for e in body["errors"]} == {"name", "budget"}


def test_malformed_json_is_a_validation_error():
    response = client.post(
        "/api/departments",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_update_department_is_partial():
    created = client.post(
        "/api/departments",
        json={"name": "Ops", "description": "Operations", "budget": 50},
    ).json()["data"]

    response = client.put(f"/api/departments/{created['id']}", json={"budget": 75.5})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Department updated successfully"
    assert body["data"]["budget"] == "75.50"
    assert body["data"]["name"] == "Ops"
    assert body["data"]["description"] == "Operations"


def test_update_missing_department():
    response = client.put("/api/departments/404", json={"name": "Ghost"})
    assert response.status_code == 404


def test_update_department_rejects_empty_name():
    dept_id = client.post("/api/departments", json={"name": "Ops"}).json()["data"]["id"]
    response = client.put(f"/api/departments/{dept_id}", json={"name": ""})
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "name", "message": "Department name cannot be empty"}]


def test_delete_missing_department():
    assert client.delete("/api/departments/12345").status_code == 404


def test_array_body_reports_body_field():
    response = client.post("/api/departments", json=["Engineering"])
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "body", "message": "Payload must be an object"}]


def test_create_app_uses_given_database():
    # Importing the app module must not build an engine of its own
    assert not hasattr(main, "app")
    built = main.create_app(settings=app.state.settings, database=app.state.database, service=app.state.service)
    assert built.state.database is app.state.database
    assert built.state.service is app.state.service
