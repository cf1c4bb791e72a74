from typing import Any, List, Mapping, Optional

from loguru import logger

from .errors import DepartmentInUseError, DuplicateEmailError, NotFoundError
from .repository import Repository
from .schemas import DepartmentRecord, EmployeeRecord
from .validation import validate_payload


class HRService:
    """
    Business operations shared by the REST and gRPC front-ends.

    Each write follows the same pipeline: validate the raw payload, check the
    rows it refers to, mutate, then re-read the result through the repository.
    Errors from `hr_api.errors` are raised as-is for the front-end to translate.
    """

    def __init__(self, repository: Repository):
        self.repository = repository

    # ----------------------------
    # Departments
    # ----------------------------
    def list_departments(self, include_employees: bool = False) -> List[DepartmentRecord]:
        return self.repository.list_departments(include_employees=include_employees)

    def get_department(self, department_id: int) -> DepartmentRecord:
        dept = self.repository.get_department(department_id, include_employees=True)
        if dept is None:
            raise NotFoundError("Department")
        return dept

    def create_department(self, payload: Mapping[str, Any]) -> DepartmentRecord:
        data = validate_payload("department", "create", payload)
        created = self.repository.create_department(data)
        logger.info("Department {} created", created.id)
        return self._reload_department(created.id)

    def update_department(self, department_id: int, payload: Mapping[str, Any]) -> DepartmentRecord:
        data = validate_payload("department", "update", payload)
        if self.repository.update_department(department_id, data) is None:
            raise NotFoundError("Department")
        return self._reload_department(department_id)

    def delete_department(self, department_id: int) -> None:
        if not self.repository.department_exists(department_id):
            raise NotFoundError("Department")

        # Delete guard: employees must be moved or removed first
        count = self.repository.count_employees(department_id)
        if count > 0:
            raise DepartmentInUseError(count)

        if not self.repository.delete_department(department_id):
            raise NotFoundError("Department")
        logger.info("Department {} deleted", department_id)

    def _reload_department(self, department_id: int) -> DepartmentRecord:
        dept = self.repository.get_department(department_id, include_employees=False)
        if dept is None:
            raise NotFoundError("Department")
        return dept

    # ----------------------------
    # Employees
    # ----------------------------
    def list_employees(self) -> List[EmployeeRecord]:
        return self.repository.list_employees()

    def get_employee(self, employee_id: int) -> EmployeeRecord:
        emp = self.repository.get_employee(employee_id)
        if emp is None:
            raise NotFoundError("Employee")
        return emp

    def create_employee(self, payload: Mapping[str, Any]) -> EmployeeRecord:
        data = validate_payload("employee", "create", payload)
        if not self.repository.department_exists(data["department_id"]):
            raise NotFoundError("Department")
        self._check_email(data["email"])

        created = self.repository.create_employee(data)
        logger.info("Employee {} created in department {}", created.id, created.department_id)
        return self.get_employee(created.id)

    def update_employee(self, employee_id: int, payload: Mapping[str, Any]) -> EmployeeRecord:
        data = validate_payload("employee", "update", payload)
        if self.repository.get_employee(employee_id) is None:
            raise NotFoundError("Employee")
        if "department_id" in data and not self.repository.department_exists(data["department_id"]):
            raise NotFoundError("Department")
        if "email" in data:
            self._check_email(data["email"], employee_id)

        if self.repository.update_employee(employee_id, data) is None:
            raise NotFoundError("Employee")
        return self.get_employee(employee_id)

    def delete_employee(self, employee_id: int) -> None:
        # No dependents to guard
        if not self.repository.delete_employee(employee_id):
            raise NotFoundError("Employee")
        logger.info("Employee {} deleted", employee_id)

    def _check_email(self, email: str, employee_id: Optional[int] = None):
        owner = self.repository.find_employee_by_email(email)
        if owner is not None and owner.id != employee_id:
            raise DuplicateEmailError()
