import asyncio

from core.config import settings
from core.logging_config import get_logger
from grpc_app.server import create_server


logger = get_logger(__name__)


async def main() -> None:
    if not settings.grpc.enabled:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")
        return

    server, port = await create_server()
    address = f"{settings.grpc.host}:{port}"
    logger.info("grpc_starting", address=address)
    await server.start()
    logger.info("grpc_started", address=address)
    try:
        await server.wait_for_termination()
    finally:
        # In-flight calls get the grace period; new calls are rejected
        logger.info("grpc_stopping", grace=settings.grpc.shutdown_grace_seconds)
        await server.stop(settings.grpc.shutdown_grace_seconds)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
