from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload, joinedload

from .db import Database
from .errors import DepartmentInUseError, DuplicateEmailError, NotFoundError
from .models import Department, Employee
from .schemas import (
    DepartmentRecord,
    DepartmentSummary,
    EmployeeRecord,
    EmployeeSummary,
)


class Repository(Protocol):
    """Storage operations the service core relies on. Records in, records out."""

    def list_departments(self, include_employees: bool = False) -> List[DepartmentRecord]: ...
    def get_department(self, department_id: int, include_employees: bool = True) -> Optional[DepartmentRecord]: ...
    def department_exists(self, department_id: int) -> bool: ...
    def count_employees(self, department_id: int) -> int: ...
    def create_department(self, data: Dict[str, Any]) -> DepartmentRecord: ...
    def update_department(self, department_id: int, data: Dict[str, Any]) -> Optional[DepartmentRecord]: ...
    def delete_department(self, department_id: int) -> bool: ...

    def list_employees(self) -> List[EmployeeRecord]: ...
    def get_employee(self, employee_id: int) -> Optional[EmployeeRecord]: ...
    def find_employee_by_email(self, email: str) -> Optional[EmployeeRecord]: ...
    def create_employee(self, data: Dict[str, Any]) -> EmployeeRecord: ...
    def update_employee(self, employee_id: int, data: Dict[str, Any]) -> Optional[EmployeeRecord]: ...
    def delete_employee(self, employee_id: int) -> bool: ...


def _columns(record_cls, obj) -> Dict[str, Any]:
    # Plain column values only, relationships are filled in by the caller
    return {name: getattr(obj, name) for name in record_cls.model_fields if name not in record_cls.JOINS}


def department_record(dept: Department, include_employees: bool = False) -> DepartmentRecord:
    employees = None
    if include_employees:
        employees = [EmployeeSummary(**_columns(EmployeeSummary, e)) for e in dept.employees]
    return DepartmentRecord(**_columns(DepartmentRecord, dept), employees=employees)


def employee_record(emp: Employee, include_department: bool = True) -> EmployeeRecord:
    department = DepartmentSummary(**_columns(DepartmentSummary, emp.department)) if include_department else None
    return EmployeeRecord(**_columns(EmployeeRecord, emp), department=department)


def _violation(e: IntegrityError) -> Optional[str]:
    # sqlstate on PostgreSQL, message text on SQLite
    sqlstate = getattr(e.orig, "sqlstate", None)
    text = str(e.orig).lower()
    if sqlstate == "23505" or "unique" in text or "duplicate" in text:
        return "unique"
    if sqlstate == "23503" or "foreign key" in text:
        return "foreign_key"
    return None


def _integrity_error(e: IntegrityError) -> Optional[Exception]:
    """Maps a constraint violation on employees to a domain error, None if unrecognized."""
    kind = _violation(e)
    if kind == "unique":
        return DuplicateEmailError()
    if kind == "foreign_key":
        return NotFoundError("Department")
    return None


class SqlRepository:
    """
    Repository over SQLAlchemy. Every operation checks a session out of the
    shared Database handle and runs in its own transaction.
    """

    def __init__(self, database: Database):
        self.sessions = database.sessions

    # ----------------------------
    # Departments
    # ----------------------------
    def list_departments(self, include_employees: bool = False) -> List[DepartmentRecord]:
        stmt = select(Department).order_by(Department.created_at.desc(), Department.id.desc())
        if include_employees:
            stmt = stmt.options(selectinload(Department.employees))
        with self.sessions() as session:
            rows = session.scalars(stmt).all()
            return [department_record(d, include_employees) for d in rows]

    def get_department(self, department_id: int, include_employees: bool = True) -> Optional[DepartmentRecord]:
        options = [selectinload(Department.employees)] if include_employees else []
        with self.sessions() as session:
            dept = session.get(Department, department_id, options=options)
            if dept is None:
                return None
            return department_record(dept, include_employees)

    def department_exists(self, department_id: int) -> bool:
        with self.sessions() as session:
            return session.get(Department, department_id) is not None

    def count_employees(self, department_id: int) -> int:
        stmt = select(func.count(Employee.id)).where(Employee.department_id == department_id)
        with self.sessions() as session:
            return session.scalar(stmt) or 0

    def create_department(self, data: Dict[str, Any]) -> DepartmentRecord:
        with self.sessions.begin() as session:
            dept = Department(**data)
            session.add(dept)
            session.flush()
            return department_record(dept)

    def update_department(self, department_id: int, data: Dict[str, Any]) -> Optional[DepartmentRecord]:
        with self.sessions.begin() as session:
            dept = session.get(Department, department_id, with_for_update=True)
            if dept is None:
                return None
            for key, value in data.items():
                setattr(dept, key, value)
            session.flush()
            return department_record(dept)

    def delete_department(self, department_id: int) -> bool:
        try:
            with self.sessions.begin() as session:
                dept = session.get(Department, department_id, with_for_update=True)
                if dept is None:
                    return False
                session.delete(dept)
        except IntegrityError as e:
            if _violation(e) != "foreign_key":
                raise
            # An employee was added after the caller's dependents check
            raise DepartmentInUseError(self.count_employees(department_id)) from None
        return True

    # ----------------------------
    # Employees
    # ----------------------------
    def list_employees(self) -> List[EmployeeRecord]:
        stmt = (
            select(Employee)
            .options(joinedload(Employee.department))
            .order_by(Employee.created_at.desc(), Employee.id.desc())
        )
        with self.sessions() as session:
            return [employee_record(e) for e in session.scalars(stmt).all()]

    def get_employee(self, employee_id: int) -> Optional[EmployeeRecord]:
        with self.sessions() as session:
            emp = session.get(Employee, employee_id, options=[joinedload(Employee.department)])
            if emp is None:
                return None
            return employee_record(emp)

    def find_employee_by_email(self, email: str) -> Optional[EmployeeRecord]:
        stmt = select(Employee).where(func.lower(Employee.email) == email.lower())
        with self.sessions() as session:
            emp = session.scalars(stmt).first()
            if emp is None:
                return None
            return employee_record(emp, include_department=False)

    def create_employee(self, data: Dict[str, Any]) -> EmployeeRecord:
        try:
            with self.sessions.begin() as session:
                emp = Employee(**data)
                session.add(emp)
                session.flush()
                record = employee_record(emp, include_department=False)
        except IntegrityError as e:
            error = _integrity_error(e)
            if error is None:
                raise
            raise error from None
        return record

    def update_employee(self, employee_id: int, data: Dict[str, Any]) -> Optional[EmployeeRecord]:
        try:
            with self.sessions.begin() as session:
                emp = session.get(Employee, employee_id, with_for_update=True)
                if emp is None:
                    return None
                for key, value in data.items():
                    setattr(emp, key, value)
                session.flush()
                record = employee_record(emp, include_department=False)
        except IntegrityError as e:
            error = _integrity_error(e)
            if error is None:
                raise
            raise error from None
        return record

    def delete_employee(self, employee_id: int) -> bool:
        with self.sessions.begin() as session:
            emp = session.get(Employee, employee_id)
            if emp is None:
                return False
            session.delete(emp)
        return True
