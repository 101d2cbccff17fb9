import asyncio
from typing import AsyncIterator, Iterable, List, TypeVar

import pytest

from application.services import route_guide_service as module
from application.services.route_guide_service import RouteGuideApplicationService
from domain.route_guide import Feature, Point, Rectangle, RouteNote, RouteSummary


pytestmark = pytest.mark.asyncio

T = TypeVar("T")


async def _stream(items: Iterable[T]) -> AsyncIterator[T]:
    for item in items:
        yield item


async def _collect(agen: AsyncIterator[T]) -> List[T]:
    return [item async for item in agen]


@pytest.fixture
def make_service(feature_repo, note_repo):
    def _make(clock=None) -> RouteGuideApplicationService:
        kwargs = {"features": feature_repo, "notes": note_repo}
        if clock is not None:
            kwargs["clock"] = clock
        return RouteGuideApplicationService(**kwargs)
    return _make


# get_feature

async def test_get_feature_returns_known_feature(make_service):
    svc = make_service()
    feature = svc.get_feature(Point(latitude=10_000_000, longitude=0))
    assert feature == Feature(name="One North", location=Point(latitude=10_000_000, longitude=0))


async def test_get_feature_unknown_point_returns_unnamed_feature(make_service):
    svc = make_service()
    point = Point(latitude=123, longitude=456)
    feature = svc.get_feature(point)
    assert feature.name == ""
    assert feature.location == point


async def test_get_feature_is_idempotent(make_service):
    svc = make_service()
    point = Point(latitude=0, longitude=0)
    assert svc.get_feature(point) == svc.get_feature(point)


# list_features

async def test_list_features_skips_unnamed_and_keeps_order(make_service):
    svc = make_service()
    rect = Rectangle(
        lo=Point(latitude=10_000_000, longitude=20_000_000),
        hi=Point(latitude=0, longitude=0),
    )
    names = [f.name for f in await _collect(svc.list_features(rect))]
    # The unnamed feature at (5, 5) lies inside the rectangle
    assert names == ["Origin", "One North", "Far East"]


async def test_list_features_degenerate_rectangle_matches_exact_point(make_service):
    svc = make_service()
    corner = Point(latitude=-10_000_000, longitude=-10_000_000)
    features = await _collect(svc.list_features(Rectangle(lo=corner, hi=corner)))
    assert [f.name for f in features] == ["South West"]


async def test_list_features_never_emits_unnamed(make_service):
    svc = make_service()
    rect = Rectangle(
        lo=Point(latitude=-900_000_000, longitude=-1_800_000_000),
        hi=Point(latitude=900_000_000, longitude=1_800_000_000),
    )
    features = await _collect(svc.list_features(rect))
    assert len(features) == 4
    assert all(f.name for f in features)


# record_route

async def test_record_route_empty_stream(make_service, fake_clock):
    clock = fake_clock()
    svc = make_service(clock)
    summary = await svc.record_route(_stream([]))
    assert summary == RouteSummary(point_count=0, feature_count=0, distance=0, elapsed_time=0)
    assert clock.calls == 0


async def test_record_route_single_point_has_no_distance(make_service, fake_clock):
    svc = make_service(fake_clock(10.0, 10.2))
    summary = await svc.record_route(_stream([Point(latitude=0, longitude=20_000_000)]))
    assert summary.point_count == 1
    assert summary.feature_count == 1
    assert summary.distance == 0
    assert summary.elapsed_time == 0


async def test_record_route_accumulates(make_service, fake_clock):
    svc = make_service(fake_clock(100.0, 103.7))
    points = [
        Point(latitude=0, longitude=0),           # Origin
        Point(latitude=10_000_000, longitude=0),  # One North
        Point(latitude=0, longitude=0),           # Origin again
        Point(latitude=1, longitude=1),           # unknown
    ]
    summary = await svc.record_route(_stream(points))
    assert summary.point_count == 4
    assert summary.feature_count == 3
    # Two one-degree legs plus a tiny last leg
    assert summary.distance == 222_390
    # Truncated to whole seconds
    assert summary.elapsed_time == 3


async def test_record_route_timer_starts_on_first_point(make_service):
    ticks = []

    def clock() -> float:
        ticks.append(len(ticks))
        return 50.0 * len(ticks)

    svc = make_service(clock)
    consumed = []

    async def points():
        await asyncio.sleep(0)
        assert ticks == []
        for p in (Point(latitude=0, longitude=0), Point(latitude=1, longitude=0)):
            consumed.append(p)
            yield p

    summary = await svc.record_route(points())
    assert len(consumed) == 2
    assert len(ticks) == 2
    assert summary.elapsed_time == 50


@pytest.mark.parametrize("raw, expected", [(2.5, 2), (3.5, 4), (2.4999, 2), (2.5001, 3)])
async def test_record_route_rounds_half_to_even(make_service, fake_clock, monkeypatch, raw, expected):
    monkeypatch.setattr(module, "distance", lambda a, b: raw)
    svc = make_service(fake_clock(0.0, 0.0))
    summary = await svc.record_route(_stream([Point(latitude=0, longitude=0), Point(latitude=1, longitude=0)]))
    assert summary.distance == expected


async def test_record_route_discards_partial_state_on_cancel(make_service, fake_clock):
    svc = make_service(fake_clock(0.0, 1.0))
    gate = asyncio.Event()

    async def points():
        yield Point(latitude=0, longitude=0)
        await gate.wait()
        yield Point(latitude=1, longitude=0)

    task = asyncio.ensure_future(svc.record_route(points()))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


# route_chat

async def test_route_chat_replays_then_appends(make_service):
    svc = make_service()
    here = Point(latitude=0, longitude=0)
    there = Point(latitude=0, longitude=1)
    n1 = RouteNote(location=here, message="First message")
    n2 = RouteNote(location=there, message="Second message")
    n3 = RouteNote(location=here, message="Third message")
    n4 = RouteNote(location=here, message="Fourth message")

    replies = await _collect(svc.route_chat(_stream([n1, n2, n3, n4])))
    assert replies == [n1, n1, n3]


async def test_route_chat_replay_is_lazy(make_service):
    svc = make_service()
    here = Point(latitude=7, longitude=7)
    n1 = RouteNote(location=here, message="a")
    n2 = RouteNote(location=here, message="b")
    second_sent = False

    async def notes():
        nonlocal second_sent
        yield n1
        second_sent = True
        yield n2

    replies = svc.route_chat(notes())
    first = await replies.__anext__()
    # n1 was replayed while processing n2, not before
    assert second_sent
    assert first == n1
    with pytest.raises(StopAsyncIteration):
        await replies.__anext__()


async def test_route_chat_sees_other_callers(make_service):
    svc = make_service()
    here = Point(latitude=3, longitude=3)
    first_done = asyncio.Event()

    async def caller_a():
        yield RouteNote(location=here, message="from a")
        first_done.set()

    async def caller_b():
        await first_done.wait()
        yield RouteNote(location=here, message="from b")

    replies_a, replies_b = await asyncio.gather(
        _collect(svc.route_chat(caller_a())),
        _collect(svc.route_chat(caller_b())),
    )
    assert replies_a == []
    assert [n.message for n in replies_b] == ["from a"]


async def test_concurrent_route_chats_keep_consistent_log(make_service, note_repo):
    svc = make_service()
    here = Point(latitude=4, longitude=4)
    per_caller = 20

    async def notes(tag: str):
        for i in range(per_caller):
            yield RouteNote(location=here, message=f"{tag}{i}")
            await asyncio.sleep(0)

    await asyncio.gather(
        _collect(svc.route_chat(notes("a"))),
        _collect(svc.route_chat(notes("b"))),
    )
    log = await note_repo.notes_at(here)
    assert len(log) == 2 * per_caller
    assert len({n.message for n in log}) == 2 * per_caller
    # Each caller's own notes stay in send order
    for tag in ("a", "b"):
        own = [n.message for n in log if n.message.startswith(tag)]
        assert own == [f"{tag}{i}" for i in range(per_caller)]


async def test_route_chat_keeps_note_when_closed_mid_replay(make_service, note_repo):
    svc = make_service()
    here = Point(latitude=5, longitude=5)
    earlier = [RouteNote(location=here, message=f"old{i}") for i in range(3)]
    for note in earlier:
        await note_repo.replay_and_append(note)
    mine = RouteNote(location=here, message="mine")

    replies = svc.route_chat(_stream([mine]))
    assert await replies.__anext__() == earlier[0]
    # Caller goes away with two replayed notes still pending
    await replies.aclose()

    assert await note_repo.notes_at(here) == [*earlier, mine]
