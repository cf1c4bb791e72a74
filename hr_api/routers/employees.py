from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, Body, Depends

from ..deps import get_service
from ..responses import success_response
from ..services import HRService

router = APIRouter(prefix="/api/employees", tags=["employees"])


# GET /api/employees - always joins the department
@router.get("")
def list_employees(service: HRService = Depends(get_service)):
    employees = service.list_employees()
    return success_response(data=[e.to_json() for e in employees], count=len(employees))


@router.get("/{employee_id}")
def get_employee(employee_id: int, service: HRService = Depends(get_service)):
    return success_response(data=service.get_employee(employee_id).to_json())


# departmentId must point at an existing department, email must be unused
@router.post("")
def create_employee(payload: Any = Body(...), service: HRService = Depends(get_service)):
    employee = service.create_employee(payload)
    return success_response(
        data=employee.to_json(),
        message="Employee created successfully",
        status=HTTPStatus.CREATED,
    )


@router.put("/{employee_id}")
def update_employee(employee_id: int, payload: Any = Body(...), service: HRService = Depends(get_service)):
    employee = service.update_employee(employee_id, payload)
    return success_response(data=employee.to_json(), message="Employee updated successfully")


@router.delete("/{employee_id}")
def delete_employee(employee_id: int, service: HRService = Depends(get_service)):
    service.delete_employee(employee_id)
    return success_response(message="Employee deleted successfully")
