import uvicorn
from loguru import logger

from .config import load_settings
from .db import Database
from .log import configure_logging
from .main import create_app
from .repository import SqlRepository
from .rpc.server import create_grpc_server
from .services import HRService


def main():
    """Runs the REST and gRPC front-ends in one process over one database handle."""
    settings = load_settings()
    configure_logging(settings.log_level)

    database = Database(settings)
    service = HRService(SqlRepository(database))

    grpc_server, grpc_port = create_grpc_server(
        service,
        port=settings.grpc_port,
        host=settings.host,
        max_workers=settings.grpc_max_workers,
    )
    grpc_server.start()
    logger.info("gRPC server running on port {}", grpc_port)

    app = create_app(settings=settings, database=database, service=service)
    try:
        logger.info("HTTP server running on http://{}:{}", settings.host, settings.port)
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        grpc_server.stop(grace=5).wait()
        database.dispose()
        logger.info("Servers stopped")


if __name__ == "__main__":
    main()
