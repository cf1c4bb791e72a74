from fastapi import Request

from .services import HRService


# Dependency to get the shared service core built at startup
def get_service(request: Request) -> HRService:
    return request.app.state.service
