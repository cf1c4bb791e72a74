"""
Translation between gRPC wire messages (snake_case fields, doubles, ISO
strings) and the service core's camelCase payloads and records.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..schemas import DepartmentRecord, DepartmentSummary, EmployeeRecord, EmployeeSummary
from .protos import protos

# wire field -> payload key
DEPARTMENT_FIELDS = {
    "name": "name",
    "description": "description",
    "budget": "budget",
}

EMPLOYEE_FIELDS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "position": "position",
    "salary": "salary",
    "hire_date": "hireDate",
    "department_id": "departmentId",
}


def message_to_payload(message, fields: Dict[str, str]) -> Dict[str, Any]:
    # Only fields the caller actually set take part in the payload
    return {key: getattr(message, wire) for wire, key in fields.items() if message.HasField(wire)}


def _iso(value: Optional[Any]) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return ""


def _money(value) -> Optional[float]:
    return float(value) if value is not None else None


def _fields(**values) -> Dict[str, Any]:
    # Unset optional fields stay absent on the wire
    return {k: v for k, v in values.items() if v is not None}


def employee_summary_to_message(emp: EmployeeSummary):
    return protos.EmployeeSummary(**_fields(
        id=emp.id,
        first_name=emp.first_name,
        last_name=emp.last_name,
        email=emp.email,
        position=emp.position,
        salary=_money(emp.salary),
        hire_date=_iso(emp.hire_date),
    ))


def department_summary_to_message(dept: DepartmentSummary):
    return protos.DepartmentSummary(**_fields(
        id=dept.id,
        name=dept.name,
        description=dept.description,
        budget=_money(dept.budget),
    ))


def department_to_message(dept: DepartmentRecord):
    return protos.Department(**_fields(
        id=dept.id,
        name=dept.name,
        description=dept.description,
        budget=_money(dept.budget),
        created_at=_iso(dept.created_at),
        updated_at=_iso(dept.updated_at),
        employees=[employee_summary_to_message(e) for e in dept.employees or []],
    ))


def employee_to_message(emp: EmployeeRecord):
    message = protos.Employee(**_fields(
        id=emp.id,
        first_name=emp.first_name,
        last_name=emp.last_name,
        email=emp.email,
        position=emp.position,
        salary=_money(emp.salary),
        hire_date=_iso(emp.hire_date),
        department_id=emp.department_id,
        created_at=_iso(emp.created_at),
        updated_at=_iso(emp.updated_at),
    ))
    if emp.department is not None:
        message.department.CopyFrom(department_summary_to_message(emp.department))
    return message
