from datetime import date, timedelta

import pytest

from app.core.enums import LeaveStatus
from app.db import models

from conftest import auth_headers

TOMORROW = date.today() + timedelta(days=1)


def leave_body(start=TOMORROW, days=3, leave_type="CASUAL", reason="Visiting family back home"):
    return {
        "leave_type": leave_type,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=days - 1)).isoformat(),
        "reason": reason,
    }


@pytest.fixture
def pending_leave(client, employee):
    response = client.post("/api/leaves", headers=auth_headers(employee), json=leave_body())
    assert response.status_code == 201
    return response.json()["data"]["leave"]


def test_employee_submits_leave(client, employee, pending_leave):
    assert pending_leave["status"] == "PENDING"
    assert pending_leave["total_days"] == 3
    assert pending_leave["employee_id"] == employee.id
    assert pending_leave["employee"]["name"] == employee.name


def test_managers_cannot_submit(client, hr_manager):
    response = client.post("/api/leaves", headers=auth_headers(hr_manager), json=leave_body())
    assert response.status_code == 403


def test_overlapping_submission_is_rejected(client, employee, pending_leave):
    response = client.post("/api/leaves", headers=auth_headers(employee),
                           json=leave_body(start=TOMORROW + timedelta(days=1)))
    assert response.status_code == 400
    assert response.json() == {
        "success": False, "message": "You have overlapping leave requests for the selected dates",
    }


@pytest.mark.parametrize("body", [
    leave_body(reason="short"),
    leave_body(leave_type="VACATION"),
    leave_body(start=date.today() - timedelta(days=3)),
    leave_body(days=1),
])
def test_invalid_submissions(client, employee, body):
    response = client.post("/api/leaves", headers=auth_headers(employee), json=body)
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_employee_lists_only_own_leaves(client, employee, other_employee, hr_manager, pending_leave):
    client.post("/api/leaves", headers=auth_headers(other_employee), json=leave_body())

    mine = client.get("/api/leaves", headers=auth_headers(employee)).json()["data"]
    assert [leave["id"] for leave in mine["leaves"]] == [pending_leave["id"]]
    assert mine["pagination"] == {"current": 1, "pages": 1, "total": 1}

    everyone = client.get("/api/leaves", headers=auth_headers(hr_manager)).json()["data"]
    assert everyone["pagination"]["total"] == 2

    filtered = client.get("/api/leaves", headers=auth_headers(hr_manager),
                          params={"employee_id": other_employee.id}).json()["data"]
    assert filtered["pagination"]["total"] == 1


def test_list_filters(client, employee, hr_manager, pending_leave):
    headers = auth_headers(hr_manager)
    assert client.get("/api/leaves", headers=headers, params={"status": "APPROVED"}).json()["data"]["leaves"] == []
    assert len(client.get("/api/leaves", headers=headers, params={"leave_type": "CASUAL"}).json()["data"]["leaves"]) == 1
    later = (TOMORROW + timedelta(days=1)).isoformat()
    assert client.get("/api/leaves", headers=headers, params={"start_date": later}).json()["data"]["leaves"] == []


def test_get_leave_visibility(client, employee, other_employee, hr_manager, pending_leave):
    url = f"/api/leaves/{pending_leave['id']}"
    assert client.get(url, headers=auth_headers(employee)).status_code == 200
    assert client.get(url, headers=auth_headers(hr_manager)).status_code == 200
    assert client.get(url, headers=auth_headers(other_employee)).status_code == 403
    assert client.get("/api/leaves/999", headers=auth_headers(hr_manager)).status_code == 404


def test_manager_approves_once(client, hr_manager, pending_leave):
    url = f"/api/leaves/{pending_leave['id']}/status"
    response = client.patch(url, headers=auth_headers(hr_manager),
                            json={"status": "APPROVED", "approval_comment": "Approved, enjoy"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Leave request approved successfully"
    assert body["data"]["leave"]["approver"]["id"] == hr_manager.id
    assert body["data"]["leave"]["approval_comment"] == "Approved, enjoy"

    again = client.patch(url, headers=auth_headers(hr_manager), json={"status": "REJECTED"})
    assert again.status_code == 400
    assert again.json()["message"] == "Only pending leave requests can be approved or rejected"


def test_employee_cannot_decide(client, employee, pending_leave):
    response = client.patch(f"/api/leaves/{pending_leave['id']}/status", headers=auth_headers(employee),
                            json={"status": "APPROVED"})
    assert response.status_code == 403


def test_employee_cancels_own_leave(client, db, employee, other_employee, pending_leave):
    url = f"/api/leaves/{pending_leave['id']}/cancel"
    assert client.patch(url, headers=auth_headers(other_employee)).status_code == 403

    response = client.patch(url, headers=auth_headers(employee))
    assert response.status_code == 200
    assert response.json()["data"]["leave"]["status"] == "CANCELLED"

    again = client.patch(url, headers=auth_headers(employee))
    assert again.status_code == 400
    assert again.json()["message"] == "Leave request is already cancelled"

    actions = [entry.action.value for entry in db.query(models.ActivityLog).order_by(models.ActivityLog.id)]
    assert actions == ["LEAVE_CREATED", "LEAVE_CANCELLED"]


def test_cancel_after_start_date(client, db, employee):
    leave = models.LeaveRequest(
        employee_id=employee.id, leave_type="SICK", start_date=date.today(),
        end_date=date.today() + timedelta(days=1), reason="Recovering from flu", status=LeaveStatus.PENDING,
        total_days=2,
    )
    db.add(leave)
    db.commit()

    response = client.patch(f"/api/leaves/{leave.id}/cancel", headers=auth_headers(employee))
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot cancel leave request after start date"


def test_balance(client, employee, hr_manager, pending_leave):
    headers = auth_headers(employee)
    year = date.fromisoformat(pending_leave["start_date"]).year

    before = client.get("/api/leaves/balance", headers=headers, params={"year": year}).json()["data"]
    assert before["balance"] == {"CASUAL": 12, "SICK": 12, "EARNED": 21}

    client.patch(f"/api/leaves/{pending_leave['id']}/status", headers=auth_headers(hr_manager),
                 json={"status": "APPROVED"})

    after = client.get("/api/leaves/balance", headers=headers, params={"year": year}).json()["data"]
    assert after["year"] == year
    assert after["used"]["CASUAL"] == 3
    assert after["balance"] == {"CASUAL": 9, "SICK": 12, "EARNED": 21}
    assert after["entitlements"] == {"CASUAL": 12, "SICK": 12, "EARNED": 21}


def test_balance_is_employee_only(client, hr_manager):
    assert client.get("/api/leaves/balance", headers=auth_headers(hr_manager)).status_code == 403
