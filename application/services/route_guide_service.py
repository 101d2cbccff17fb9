"""Application service for the route guide.

Implements the four call shapes on domain types only. The gRPC layer
maps wire messages in and out and owns transport concerns.
"""
from __future__ import annotations

import time
from typing import AsyncIterable, AsyncIterator, Callable, Optional

from core.logging_config import get_logger
from domain.route_guide import (
    Feature,
    FeatureRepository,
    Point,
    Rectangle,
    RouteNote,
    RouteNoteRepository,
    RouteSummary,
)
from domain.route_guide.geometry import contains, distance, normalize


logger = get_logger(__name__)


Clock = Callable[[], float]


class RouteGuideApplicationService:
    def __init__(
        self,
        *,
        features: FeatureRepository,
        notes: RouteNoteRepository,
        clock: Clock = time.monotonic,
    ) -> None:
        self._features = features
        self._notes = notes
        self._clock = clock

    def get_feature(self, point: Point) -> Feature:
        """Feature at ``point``, or an unnamed feature wrapping it."""
        feature = self._features.find_by_location(point)
        if feature is None:
            return Feature.unnamed(point)
        return feature

    async def list_features(self, rect: Rectangle) -> AsyncIterator[Feature]:
        """Named features inside ``rect`` in stored order."""
        area = normalize(rect)
        for feature in self._features.list_all():
            if not feature.exists:
                continue
            if contains(area, feature.location):
                yield feature

    async def record_route(self, points: AsyncIterable[Point]) -> RouteSummary:
        """Consume a route and summarise it once the stream ends.

        Distance is accumulated between consecutive points and rounded with
        the built-in ``round`` (half to even). Elapsed time starts on the
        first point and is truncated to whole seconds.
        """
        point_count = 0
        feature_count = 0
        total = 0.0
        prev_point: Optional[Point] = None
        started_at: Optional[float] = None

        async for point in points:
            if started_at is None:
                started_at = self._clock()
            point_count += 1
            if self._features.find_by_location(point) is not None:
                feature_count += 1
            if prev_point is not None:
                total += distance(prev_point, point)
            prev_point = point

        elapsed = 0.0 if started_at is None else self._clock() - started_at
        summary = RouteSummary(
            point_count=point_count,
            feature_count=feature_count,
            distance=round(total),
            elapsed_time=int(elapsed),
        )
        logger.info(
            "route_recorded",
            point_count=summary.point_count,
            feature_count=summary.feature_count,
            distance=summary.distance,
            elapsed_time=summary.elapsed_time,
        )
        return summary

    async def route_chat(self, notes: AsyncIterable[RouteNote]) -> AsyncIterator[RouteNote]:
        """Replay earlier notes at each incoming note's location, then keep it.

        The note log is shared by all callers, so the replay also contains
        notes left by other concurrent chats, but never the incoming note.
        """
        async for note in notes:
            prior = await self._notes.replay_and_append(note)
            logger.debug(
                "route_chat_note",
                latitude=note.location.latitude,
                longitude=note.location.longitude,
                replayed=len(prior),
            )
            for prev_note in prior:
                yield prev_note
