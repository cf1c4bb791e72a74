from functools import wraps

import grpc
from loguru import logger

from ..errors import DepartmentInUseError, DuplicateEmailError, NotFoundError, ValidationError
from ..services import HRService
from .mapping import (
    DEPARTMENT_FIELDS,
    EMPLOYEE_FIELDS,
    department_to_message,
    employee_to_message,
    message_to_payload,
)
from .protos import protos, services


def rpc_errors(action: str):
    """Translates service core errors into gRPC status codes."""

    def decorator(method):
        @wraps(method)
        def wrapper(self, request, context):
            try:
                return method(self, request, context)
            except ValidationError as e:
                context.abort(grpc.StatusCode.INVALID_ARGUMENT, f"Validation error: {e.summary()}")
            except NotFoundError as e:
                context.abort(grpc.StatusCode.NOT_FOUND, e.message)
            except DepartmentInUseError as e:
                context.abort(grpc.StatusCode.FAILED_PRECONDITION, e.message)
            except DuplicateEmailError as e:
                context.abort(grpc.StatusCode.ALREADY_EXISTS, f"{e.message}: {e.detail}")
            except Exception as e:
                logger.exception("gRPC {} failed", method.__name__)
                context.abort(grpc.StatusCode.INTERNAL, f"Error {action}: {e}")

        return wrapper

    return decorator


class DepartmentServicer(services.DepartmentServiceServicer):
    def __init__(self, service: HRService):
        self.service = service

    @rpc_errors("fetching departments")
    def GetAllDepartments(self, request, context):
        departments = self.service.list_departments(include_employees=request.include_employees)
        return protos.GetAllDepartmentsResponse(
            success=True,
            message="Departments fetched successfully",
            count=len(departments),
            departments=[department_to_message(d) for d in departments],
        )

    @rpc_errors("fetching department")
    def GetDepartmentById(self, request, context):
        department = self.service.get_department(request.id)
        return protos.DepartmentResponse(
            success=True,
            message="Department fetched successfully",
            department=department_to_message(department),
        )

    @rpc_errors("creating department")
    def CreateDepartment(self, request, context):
        department = self.service.create_department(message_to_payload(request, DEPARTMENT_FIELDS))
        return protos.DepartmentResponse(
            success=True,
            message="Department created successfully",
            department=department_to_message(department),
        )

    @rpc_errors("updating department")
    def UpdateDepartment(self, request, context):
        department = self.service.update_department(request.id, message_to_payload(request, DEPARTMENT_FIELDS))
        return protos.DepartmentResponse(
            success=True,
            message="Department updated successfully",
            department=department_to_message(department),
        )

    @rpc_errors("deleting department")
    def DeleteDepartment(self, request, context):
        self.service.delete_department(request.id)
        return protos.DeleteResponse(success=True, message="Department deleted successfully")


class EmployeeServicer(services.EmployeeServiceServicer):
    def __init__(self, service: HRService):
        self.service = service

    @rpc_errors("fetching employees")
    def GetAllEmployees(self, request, context):
        employees = self.service.list_employees()
        return protos.GetAllEmployeesResponse(
            success=True,
            message="Employees fetched successfully",
            count=len(employees),
            employees=[employee_to_message(e) for e in employees],
        )

    @rpc_errors("fetching employee")
    def GetEmployeeById(self, request, context):
        employee = self.service.get_employee(request.id)
        return protos.EmployeeResponse(
            success=True,
            message="Employee fetched successfully",
            employee=employee_to_message(employee),
        )

    @rpc_errors("creating employee")
    def CreateEmployee(self, request, context):
        employee = self.service.create_employee(message_to_payload(request, EMPLOYEE_FIELDS))
        return protos.EmployeeResponse(
            success=True,
            message="Employee created successfully",
            employee=employee_to_message(employee),
        )

    @rpc_errors("updating employee")
    def UpdateEmployee(self, request, context):
        employee = self.service.update_employee(request.id, message_to_payload(request, EMPLOYEE_FIELDS))
        return protos.EmployeeResponse(
            success=True,
            message="Employee updated successfully",
            employee=employee_to_message(employee),
        )

    @rpc_errors("deleting employee")
    def DeleteEmployee(self, request, context):
        self.service.delete_employee(request.id)
        return protos.DeleteResponse(success=True, message="Employee deleted successfully")
