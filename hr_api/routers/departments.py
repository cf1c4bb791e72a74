from http import HTTPStatus
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_service
from ..responses import success_response
from ..services import HRService

router = APIRouter(prefix="/api/departments", tags=["departments"])


# GET /api/departments - optional employees join with ?include=employees
@router.get("")
def list_departments(
    include: Optional[str] = Query(None, description="Pass 'employees' to join each department's employees"),
    service: HRService = Depends(get_service),
):
    departments = service.list_departments(include_employees=include == "employees")
    return success_response(data=[d.to_json() for d in departments], count=len(departments))


# GET /api/departments/{id} - always joins employees
@router.get("/{department_id}")
def get_department(department_id: int, service: HRService = Depends(get_service)):
    return success_response(data=service.get_department(department_id).to_json())


@router.post("")
def create_department(payload: Any = Body(...), service: HRService = Depends(get_service)):
    department = service.create_department(payload)
    return success_response(
        data=department.to_json(),
        message="Department created successfully",
        status=HTTPStatus.CREATED,
    )


@router.put("/{department_id}")
def update_department(department_id: int, payload: Any = Body(...), service: HRService = Depends(get_service)):
    department = service.update_department(department_id, payload)
    return success_response(data=department.to_json(), message="Department updated successfully")


# Blocked with 409 while employees still reference the department
@router.delete("/{department_id}")
def delete_department(department_id: int, service: HRService = Depends(get_service)):
    service.delete_department(department_id)
    return success_response(message="Department deleted successfully")
