"""Python message and stub modules for the protos in ``grpc_app/protos``.

Modules are compiled from the ``.proto`` files at import time by
grpcio-tools. The proto path is resolved against ``sys.path``, so the
project root must be importable.
"""
import grpc

route_guide_pb2, route_guide_pb2_grpc = grpc.protos_and_services(
    "grpc_app/protos/route_guide.proto"
)

SERVICE_NAME = "routeguide.RouteGuide"

__all__ = ["route_guide_pb2", "route_guide_pb2_grpc", "SERVICE_NAME"]
