from typing import Any, Dict, List, Mapping

import pydantic

from .errors import ValidationError
from .schemas import DepartmentCreate, DepartmentUpdate, EmployeeCreate, EmployeeUpdate
from .utils.types import EntityName, ValidationMode

SCHEMAS = {
    ("department", "create"): DepartmentCreate,
    ("department", "update"): DepartmentUpdate,
    ("employee", "create"): EmployeeCreate,
    ("employee", "update"): EmployeeUpdate,
}

# Human readable field names used in error messages
LABELS = {
    "name": "Department name",
    "description": "Description",
    "budget": "Budget",
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "position": "Position",
    "salary": "Salary",
    "hireDate": "Hire date",
    "departmentId": "Department ID",
}

# pydantic error type -> message template
MESSAGES = {
    "missing": "{label} is required",
    "string_type": "{label} must be a string",
    "string_too_short": "{label} cannot be empty",
    "string_too_long": "{label} must not exceed {max_length} characters",
    "int_type": "{label} must be an integer",
    "int_parsing": "{label} must be an integer",
    "int_from_float": "{label} must be an integer",
    "greater_than": "{label} must be a positive number",
    "date_type": "{label} must be a valid date",
    "model_type": "Payload must be an object",
}


def _message(field: str, err: Dict[str, Any]) -> str:
    label = LABELS.get(field, field)
    if field == "email" and err["type"] == "value_error" and "email" in err["msg"].lower():
        return "Please provide a valid email address"
    if err["type"] == "value_error" and "error" in err.get("ctx", {}):
        return f"{label} {err['ctx']['error']}"
    template = MESSAGES.get(err["type"])
    if template:
        return template.format(label=label, **err.get("ctx", {}))
    return f"{label}: {err['msg']}"


def validate_payload(entity: EntityName, mode: ValidationMode, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validates a raw payload against the create or update schema of an entity.

    Returns the normalized payload: only recognized fields that were present
    in the input, coerced to their Python types and keyed by model attribute
    (snake case). Raises ValidationError with every violation found.
    """
    schema = SCHEMAS[(entity, mode)]
    try:
        parsed = schema.model_validate(payload)
    except pydantic.ValidationError as e:
        aliases = {name: info.alias or name for name, info in schema.model_fields.items()}
        errors: List[Dict[str, str]] = []
        for err in e.errors():
            # An empty loc means the payload itself was rejected
            field = ".".join(aliases.get(str(part), str(part)) for part in err["loc"]) or "body"
            errors.append({"field": field, "message": _message(field, err)})
        raise ValidationError(errors) from None

    return parsed.model_dump(exclude_unset=True)
