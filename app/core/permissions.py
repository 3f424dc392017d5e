# backend-server/app/core/permissions.py
# Static table of which roles may perform which operation.
from enum import Enum

from app.core.enums import Role


class Permission(str, Enum):
    REGISTER_USER = "register_user"
    LIST_EMPLOYEES = "list_employees"
    UPDATE_EMPLOYEE = "update_employee"
    CHANGE_EMPLOYEE_STATUS = "change_employee_status"
    SUBMIT_LEAVE = "submit_leave"
    CANCEL_LEAVE = "cancel_leave"
    VIEW_LEAVE_BALANCE = "view_leave_balance"
    DECIDE_LEAVE = "decide_leave"
    VIEW_REPORTS = "view_reports"


_MANAGERS = frozenset({Role.SUPER_ADMIN, Role.HR_MANAGER})

ROLE_PERMISSIONS: dict[Permission, frozenset[Role]] = {
    Permission.REGISTER_USER: frozenset({Role.SUPER_ADMIN}),
    Permission.LIST_EMPLOYEES: _MANAGERS,
    Permission.UPDATE_EMPLOYEE: _MANAGERS,
    Permission.CHANGE_EMPLOYEE_STATUS: _MANAGERS,
    Permission.SUBMIT_LEAVE: frozenset({Role.EMPLOYEE}),
    Permission.CANCEL_LEAVE: frozenset({Role.EMPLOYEE}),
    Permission.VIEW_LEAVE_BALANCE: frozenset({Role.EMPLOYEE}),
    Permission.DECIDE_LEAVE: _MANAGERS,
    Permission.VIEW_REPORTS: _MANAGERS,
}


def has_permission(role: Role, permission: Permission) -> bool:
    return Role(role) in ROLE_PERMISSIONS[permission]
