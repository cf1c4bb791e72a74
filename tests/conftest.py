import itertools
import os
from datetime import datetime, timedelta, timezone

import pytest

# Force an in-memory SQLite database for testing. This must be done BEFORE
# importing hr_api.asgi, which builds the app and its engine at import time.
os.environ["DATABASE_URL"] = "sqlite://"

from hr_api.asgi import app
from hr_api.schemas import DepartmentRecord, DepartmentSummary, EmployeeRecord, EmployeeSummary
from hr_api.services import HRService


# Recreate all tables before each test
@pytest.fixture(autouse=True)
def setup_test_db():
    database = app.state.database
    database.drop_all()
    database.create_all()
    yield


@pytest.fixture
def service() -> HRService:
    return app.state.service


@pytest.fixture
def department(service):
    return service.create_department({"name": "Engineering", "budget": 100000})


# ----------------------------
# In-memory repository
# ----------------------------
class InMemoryRepository:
    """Dict backed implementation of hr_api.repository.Repository."""

    def __init__(self):
        self.departments = {}
        self.employees = {}
        self._department_ids = itertools.count(1)
        self._employee_ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self):
        # Strictly increasing so "newest first" ordering is deterministic
        self._clock += timedelta(seconds=1)
        return self._clock

    def _department(self, row, include_employees=False):
        employees = None
        if include_employees:
            employees = [
                EmployeeSummary(**{k: e[k] for k in EmployeeSummary.model_fields})
                for e in self.employees.values()
                if e["department_id"] == row["id"]
            ]
        return DepartmentRecord(**row, employees=employees)

    def _employee(self, row, include_department=True):
        department = None
        if include_department:
            dept = self.departments[row["department_id"]]
            department = DepartmentSummary(**{k: dept[k] for k in DepartmentSummary.model_fields})
        return EmployeeRecord(**row, department=department)

    def list_departments(self, include_employees=False):
        rows = sorted(self.departments.values(), key=lambda r: r["created_at"], reverse=True)
        return [self._department(r, include_employees) for r in rows]

    def get_department(self, department_id, include_employees=True):
        row = self.departments.get(department_id)
        return self._department(row, include_employees) if row else None

    def department_exists(self, department_id):
        return department_id in self.departments

    def count_employees(self, department_id):
        return sum(1 for e in self.employees.values() if e["department_id"] == department_id)

    def create_department(self, data):
        now = self._now()
        row = {"id": next(self._department_ids), "description": None, "budget": None,
               **data, "created_at": now, "updated_at": now}
        self.departments[row["id"]] = row
        return self._department(row)

    def update_department(self, department_id, data):
        row = self.departments.get(department_id)
        if row is None:
            return None
        row.update(data, updated_at=self._now())
        return self._department(row)

    def delete_department(self, department_id):
        return self.departments.pop(department_id, None) is not None

    def list_employees(self):
        rows = sorted(self.employees.values(), key=lambda r: r["created_at"], reverse=True)
        return [self._employee(r) for r in rows]

    def get_employee(self, employee_id):
        row = self.employees.get(employee_id)
        return self._employee(row) if row else None

    def find_employee_by_email(self, email):
        for row in self.employees.values():
            if row["email"].lower() == email.lower():
                return self._employee(row, include_department=False)
        return None

    def create_employee(self, data):
        now = self._now()
        row = {"id": next(self._employee_ids), "salary": None, **data, "created_at": now, "updated_at": now}
        self.employees[row["id"]] = row
        return self._employee(row, include_department=False)

    def update_employee(self, employee_id, data):
        row = self.employees.get(employee_id)
        if row is None:
            return None
        row.update(data, updated_at=self._now())
        return self._employee(row, include_department=False)

    def delete_employee(self, employee_id):
        return self.employees.pop(employee_id, None) is not None


@pytest.fixture
def memory_repo():
    return InMemoryRepository()


@pytest.fixture
def memory_service(memory_repo):
    return HRService(memory_repo)
