from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, ClassVar, List, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

from .utils.validators import MAX_DECIMAL, parse_date, parse_decimal


def _to_decimal(value):
    try:
        return parse_decimal(value)
    except ValueError:
        raise ValueError("must be a number")


def _check_money(value: Decimal) -> Decimal:
    if value < 0:
        raise ValueError("must be a positive number")
    if value > MAX_DECIMAL:
        raise ValueError(f"must not exceed {MAX_DECIMAL}")
    return value


def _reject_bool(value):
    # JSON true/false would otherwise be read as 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    return value


def _check_email_length(value: str) -> str:
    if len(value) > 100:
        raise ValueError("must not exceed 100 characters")
    return value


# Field types shared by the create and update schemas
DepartmentName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Position = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Email = Annotated[EmailStr, AfterValidator(_check_email_length)]
Money = Annotated[Decimal, BeforeValidator(_to_decimal), AfterValidator(_check_money)]
HireDate = Annotated[date, BeforeValidator(parse_date)]
DepartmentId = Annotated[int, BeforeValidator(_reject_bool), Field(gt=0)]


class PayloadModel(BaseModel):
    # Clients send camelCase; unknown keys are dropped
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# Input schemas for Department
class DepartmentCreate(PayloadModel):
    name: DepartmentName
    description: Optional[str] = None
    budget: Optional[Money] = None


class DepartmentUpdate(PayloadModel):
    # Defaults are never validated, an explicit null for `name` still fails
    name: DepartmentName = None
    description: Optional[str] = None
    budget: Optional[Money] = None


# Input schemas for Employee
class EmployeeCreate(PayloadModel):
    first_name: PersonName
    last_name: PersonName
    email: Email
    position: Position
    salary: Optional[Money] = None
    hire_date: HireDate
    department_id: DepartmentId


class EmployeeUpdate(PayloadModel):
    first_name: PersonName = None
    last_name: PersonName = None
    email: Email = None
    position: Position = None
    salary: Optional[Money] = None
    hire_date: HireDate = None
    department_id: DepartmentId = None


# ----------------------------
# Records returned by the repository
# ----------------------------
class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    # Relationship fields, left out of the JSON when not loaded
    JOINS: ClassVar[Tuple[str, ...]] = ()

    def to_json(self) -> dict:
        skipped = {name for name in self.JOINS if getattr(self, name) is None}
        return self.model_dump(mode="json", by_alias=True, exclude=skipped)


class EmployeeSummary(Record):
    id: int
    first_name: str
    last_name: str
    email: str
    position: str
    salary: Optional[Decimal] = None
    hire_date: date


class DepartmentSummary(Record):
    id: int
    name: str
    description: Optional[str] = None
    budget: Optional[Decimal] = None


class DepartmentRecord(DepartmentSummary):
    JOINS: ClassVar[Tuple[str, ...]] = ("employees",)

    created_at: datetime
    updated_at: datetime
    employees: Optional[List[EmployeeSummary]] = None


class EmployeeRecord(EmployeeSummary):
    JOINS: ClassVar[Tuple[str, ...]] = ("department",)

    department_id: int
    created_at: datetime
    updated_at: datetime
    department: Optional[DepartmentSummary] = None
