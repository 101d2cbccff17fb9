from __future__ import annotations

from typing import AsyncIterable, AsyncIterator

from domain.route_guide import Feature, Point, Rectangle, RouteNote, RouteSummary
from grpc_app.generated import route_guide_pb2


def point_from_proto(msg: route_guide_pb2.Point) -> Point:
    return Point(latitude=int(msg.latitude), longitude=int(msg.longitude))


def point_to_proto(point: Point) -> route_guide_pb2.Point:
    return route_guide_pb2.Point(latitude=point.latitude, longitude=point.longitude)


def rectangle_from_proto(msg: route_guide_pb2.Rectangle) -> Rectangle:
    # Unset lo/hi read as the zero point, same as proto3 defaults
    return Rectangle(lo=point_from_proto(msg.lo), hi=point_from_proto(msg.hi))


def feature_to_proto(feature: Feature) -> route_guide_pb2.Feature:
    return route_guide_pb2.Feature(
        name=feature.name,
        location=point_to_proto(feature.location),
    )


def route_note_from_proto(msg: route_guide_pb2.RouteNote) -> RouteNote:
    return RouteNote(location=point_from_proto(msg.location), message=msg.message)


def route_note_to_proto(note: RouteNote) -> route_guide_pb2.RouteNote:
    return route_guide_pb2.RouteNote(
        location=point_to_proto(note.location),
        message=note.message,
    )


def route_summary_to_proto(summary: RouteSummary) -> route_guide_pb2.RouteSummary:
    return route_guide_pb2.RouteSummary(
        point_count=summary.point_count,
        feature_count=summary.feature_count,
        distance=summary.distance,
        elapsed_time=summary.elapsed_time,
    )


async def points_from_stream(
    request_iterator: AsyncIterable[route_guide_pb2.Point],
) -> AsyncIterator[Point]:
    async for msg in request_iterator:
        yield point_from_proto(msg)


async def route_notes_from_stream(
    request_iterator: AsyncIterable[route_guide_pb2.RouteNote],
) -> AsyncIterator[RouteNote]:
    async for msg in request_iterator:
        yield route_note_from_proto(msg)
