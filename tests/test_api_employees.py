import pytest

from app.db import models

from conftest import auth_headers


def test_list_employees(client, hr_manager, employee, other_employee):
    response = client.get("/api/employees", headers=auth_headers(hr_manager), params={"limit": 2})
    data = response.json()["data"]
    assert response.status_code == 200
    assert len(data["employees"]) == 2
    assert data["pagination"] == {"current": 1, "pages": 2, "total": 3}


def test_employees_cannot_list(client, employee):
    assert client.get("/api/employees", headers=auth_headers(employee)).status_code == 403


def test_departments_for_any_user(client, employee, other_employee):
    response = client.get("/api/employees/departments", headers=auth_headers(employee))
    assert response.json()["data"] == {"departments": ["Engineering", "People", "Sales"]}


def test_read_employee(client, employee, other_employee):
    assert client.get(f"/api/employees/{employee.id}", headers=auth_headers(employee)).status_code == 200
    response = client.get(f"/api/employees/{other_employee.id}", headers=auth_headers(employee))
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. You can only access your own data."


def test_update_employee(client, hr_manager, employee, other_employee):
    url = f"/api/employees/{employee.id}"
    response = client.put(url, headers=auth_headers(hr_manager), json={"department": "Platform", "role": "SUPER_ADMIN"})
    assert response.status_code == 200
    assert response.json()["data"]["employee"]["department"] == "Platform"
    assert response.json()["data"]["employee"]["role"] == "EMPLOYEE"

    duplicate = client.put(url, headers=auth_headers(hr_manager), json={"phone": other_employee.phone})
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Phone already exists"

    invalid = client.put(url, headers=auth_headers(hr_manager), json={"phone": "12345"})
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Validation error"


@pytest.mark.parametrize("field", ["manager_id", "department", "name"])
def test_update_refuses_null(client, db, hr_manager, employee, field):
    before = getattr(employee, field)

    response = client.put(f"/api/employees/{employee.id}", headers=auth_headers(hr_manager), json={field: None})

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"
    db.expire_all()
    assert getattr(db.get(models.User, employee.id), field) == before


def test_update_with_padded_duplicate_name(client, hr_manager, employee, other_employee):
    response = client.put(f"/api/employees/{employee.id}", headers=auth_headers(hr_manager),
                          json={"name": f"{other_employee.name} "})
    assert response.status_code == 400
    assert response.json()["message"] == "Name already exists"


def test_activate_and_deactivate(client, hr_manager, employee):
    base = f"/api/employees/{employee.id}"
    assert client.patch(f"{base}/activate", headers=auth_headers(hr_manager)).json()["message"] == \
        "Employee is already active"

    response = client.patch(f"{base}/deactivate", headers=auth_headers(hr_manager))
    assert response.status_code == 200
    assert response.json()["data"]["employee"]["status"] == "INACTIVE"

    again = client.patch(f"{base}/deactivate", headers=auth_headers(hr_manager))
    assert again.status_code == 400
    assert again.json()["message"] == "Employee is already inactive"


def test_unknown_employee(client, hr_manager):
    assert client.patch("/api/employees/999/deactivate", headers=auth_headers(hr_manager)).status_code == 404
