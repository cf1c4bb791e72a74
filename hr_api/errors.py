from typing import Dict, List, Optional


# Base class for every error the service core raises on purpose
class HRApiError(Exception):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(HRApiError):
    """Payload failed schema validation. `errors` holds one {field, message} per violation."""

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("Validation error")
        self.errors = errors

    def summary(self) -> str:
        return ", ".join(e["message"] for e in self.errors)


class NotFoundError(HRApiError):
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class ConflictError(HRApiError):
    pass


class DuplicateEmailError(ConflictError):
    def __init__(self):
        super().__init__(
            "Email already exists",
            "An employee with this email already exists",
        )


class DepartmentInUseError(ConflictError):
    def __init__(self, count: Optional[int] = None):
        if count is None:
            detail = "This department still has employees. Please reassign or delete employees first."
        else:
            detail = (
                f"This department has {count} employee(s). "
                "Please reassign or delete employees first."
            )
        super().__init__(f"Cannot delete department with employees. {detail}", detail)
        self.count = count
