"""Exercise the four route guide calls against a running server.

Run from the project root:

    python -m examples.route_guide_client --target localhost:50051
"""
from __future__ import annotations

import argparse
import asyncio
import random
from typing import Iterable, Sequence

import grpc

from core.config import settings
from grpc_app.generated import route_guide_pb2, route_guide_pb2_grpc
from grpc_app.mappers.route_guide import point_to_proto
from infrastructure.repositories.feature_repository import InMemoryFeatureRepository


def make_route_note(message: str, latitude: int, longitude: int) -> route_guide_pb2.RouteNote:
    return route_guide_pb2.RouteNote(
        message=message,
        location=route_guide_pb2.Point(latitude=latitude, longitude=longitude),
    )


async def guide_get_one_feature(stub: route_guide_pb2_grpc.RouteGuideStub, point: route_guide_pb2.Point) -> None:
    feature = await stub.GetFeature(point)
    if feature.name:
        print(f"Feature called {feature.name!r} at {feature.location.latitude}, {feature.location.longitude}")
    else:
        print(f"Found no feature at {feature.location.latitude}, {feature.location.longitude}")


async def guide_get_feature(stub: route_guide_pb2_grpc.RouteGuideStub) -> None:
    await asyncio.gather(
        guide_get_one_feature(stub, route_guide_pb2.Point(latitude=409146138, longitude=-746188906)),
        guide_get_one_feature(stub, route_guide_pb2.Point(latitude=0, longitude=0)),
    )


async def guide_list_features(stub: route_guide_pb2_grpc.RouteGuideStub) -> None:
    rectangle = route_guide_pb2.Rectangle(
        lo=route_guide_pb2.Point(latitude=400000000, longitude=-750000000),
        hi=route_guide_pb2.Point(latitude=420000000, longitude=-730000000),
    )
    print("Looking for features between 40, -75 and 42, -73")
    async for feature in stub.ListFeatures(rectangle):
        print(f"Feature called {feature.name!r}")


def generate_route(locations: Sequence[route_guide_pb2.Point], size: int = 10) -> Iterable[route_guide_pb2.Point]:
    for _ in range(size):
        location = random.choice(locations)
        print(f"Visiting point {location.latitude}, {location.longitude}")
        yield location


async def guide_record_route(stub: route_guide_pb2_grpc.RouteGuideStub) -> None:
    repo = InMemoryFeatureRepository.from_json_file(settings.route_guide.features_db_path)
    locations = [point_to_proto(f.location) for f in repo.list_all()]
    summary = await stub.RecordRoute(generate_route(locations))
    print(f"Finished trip with {summary.point_count} points")
    print(f"Passed {summary.feature_count} features")
    print(f"Travelled {summary.distance} meters")
    print(f"It took {summary.elapsed_time} seconds")


def generate_messages() -> Iterable[route_guide_pb2.RouteNote]:
    messages = [
        make_route_note("First message", 0, 0),
        make_route_note("Second message", 0, 1),
        make_route_note("Third message", 1, 0),
        make_route_note("Fourth message", 0, 0),
        make_route_note("Fifth message", 1, 0),
    ]
    for msg in messages:
        print(f"Sending {msg.message!r} at {msg.location.latitude}, {msg.location.longitude}")
        yield msg


async def guide_route_chat(stub: route_guide_pb2_grpc.RouteGuideStub) -> None:
    async for response in stub.RouteChat(generate_messages()):
        print(f"Received {response.message!r} at {response.location.latitude}, {response.location.longitude}")


async def main(target: str) -> None:
    async with grpc.aio.insecure_channel(target) as channel:
        stub = route_guide_pb2_grpc.RouteGuideStub(channel)
        print("-------------- GetFeature --------------")
        await guide_get_feature(stub)
        print("-------------- ListFeatures --------------")
        await guide_list_features(stub)
        print("-------------- RecordRoute --------------")
        await guide_record_route(stub)
        print("-------------- RouteChat --------------")
        await guide_route_chat(stub)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Route guide demo client")
    parser.add_argument("--target", default=f"localhost:{settings.grpc.port}")
    args = parser.parse_args()
    asyncio.run(main(args.target))
