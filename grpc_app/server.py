from __future__ import annotations

from typing import Optional, Sequence, Tuple
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2

from core.config import settings
from core.logging_config import get_logger
from application.services.route_guide_service import RouteGuideApplicationService
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.generated import SERVICE_NAME, route_guide_pb2_grpc
from grpc_app.services.route_guide_service import RouteGuideService
from infrastructure.repositories.feature_repository import InMemoryFeatureRepository
from infrastructure.repositories.route_note_repository import InMemoryRouteNoteRepository


logger = get_logger(__name__)


def build_route_guide_service() -> RouteGuideApplicationService:
    features = InMemoryFeatureRepository.from_json_file(settings.route_guide.features_db_path)
    return RouteGuideApplicationService(
        features=features,
        notes=InMemoryRouteNoteRepository(),
    )


def _server_credentials() -> grpc.ServerCredentials:
    tls = settings.grpc.tls
    if not (tls.cert and tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    with open(tls.cert, "rb") as f:
        cert_chain = f.read()
    with open(tls.key, "rb") as f:
        private_key = f.read()
    root_certificates = None
    if tls.ca:
        with open(tls.ca, "rb") as f:
            root_certificates = f.read()
    return grpc.ssl_server_credentials(
        [(private_key, cert_chain)],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )


async def create_server(
    svc: Optional[RouteGuideApplicationService] = None,
    *,
    address: Optional[str] = None,
) -> Tuple[grpc.aio.Server, int]:
    """Build the server and bind it; returns the server and its bound port.

    ``address`` defaults to the configured host and port. Port 0 picks an
    ephemeral port.
    """
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, settings.grpc.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    # Register services
    if svc is None:
        svc = build_route_guide_service()
    route_guide_pb2_grpc.add_RouteGuideServicer_to_server(RouteGuideService(svc), server)

    # Health service
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)

    # Bind address
    if address is None:
        address = f"{settings.grpc.host}:{settings.grpc.port}"

    if settings.grpc.tls.enabled:
        port = server.add_secure_port(address, _server_credentials())
    else:
        port = server.add_insecure_port(address)

    logger.debug("grpc_server_created", address=address, port=port, tls=settings.grpc.tls.enabled)
    return server, port
