from concurrent import futures
from typing import Tuple

import grpc
from loguru import logger

from ..services import HRService
from .protos import services
from .servicers import DepartmentServicer, EmployeeServicer


def create_grpc_server(
    service: HRService,
    port: int = 50051,
    host: str = "0.0.0.0",
    max_workers: int = 10,
) -> Tuple[grpc.Server, int]:
    """
    Builds (but does not start) the gRPC server for both services.
    Returns the server and the port actually bound, so port 0 can be used
    to pick a free one.
    """
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))
    services.add_DepartmentServiceServicer_to_server(DepartmentServicer(service), server)
    services.add_EmployeeServiceServicer_to_server(EmployeeServicer(service), server)

    bound = server.add_insecure_port(f"{host}:{port}")
    if bound == 0:
        raise RuntimeError(f"Could not bind gRPC server to {host}:{port}")
    logger.info("gRPC server bound to {}:{}", host, bound)
    return server, bound
