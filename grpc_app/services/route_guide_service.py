from __future__ import annotations

from typing import AsyncIterable, AsyncIterator

import grpc

from application.services.route_guide_service import RouteGuideApplicationService
from grpc_app.generated import route_guide_pb2, route_guide_pb2_grpc
from grpc_app.mappers.route_guide import (
    feature_to_proto,
    point_from_proto,
    points_from_stream,
    rectangle_from_proto,
    route_note_to_proto,
    route_notes_from_stream,
    route_summary_to_proto,
)


class RouteGuideService(route_guide_pb2_grpc.RouteGuideServicer):
    def __init__(self, svc: RouteGuideApplicationService) -> None:
        self._svc = svc

    # unary-unary
    async def GetFeature(self, request: route_guide_pb2.Point, context: grpc.aio.ServicerContext) -> route_guide_pb2.Feature:  # type: ignore[override]
        feature = self._svc.get_feature(point_from_proto(request))
        return feature_to_proto(feature)

    # unary-stream
    async def ListFeatures(self, request: route_guide_pb2.Rectangle, context: grpc.aio.ServicerContext) -> AsyncIterator[route_guide_pb2.Feature]:  # type: ignore[override]
        async for feature in self._svc.list_features(rectangle_from_proto(request)):
            yield feature_to_proto(feature)

    # stream-unary
    async def RecordRoute(self, request_iterator: AsyncIterable[route_guide_pb2.Point], context: grpc.aio.ServicerContext) -> route_guide_pb2.RouteSummary:  # type: ignore[override]
        summary = await self._svc.record_route(points_from_stream(request_iterator))
        return route_summary_to_proto(summary)

    # stream-stream
    async def RouteChat(self, request_iterator: AsyncIterable[route_guide_pb2.RouteNote], context: grpc.aio.ServicerContext) -> AsyncIterator[route_guide_pb2.RouteNote]:  # type: ignore[override]
        async for note in self._svc.route_chat(route_notes_from_stream(request_iterator)):
            yield route_note_to_proto(note)
