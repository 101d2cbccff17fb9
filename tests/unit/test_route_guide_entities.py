import dataclasses

import pytest

from domain.common.exceptions import InvalidCoordinateException
from domain.route_guide import Feature, Point, RouteSummary
from shared.codes import BusinessCode


def test_points_compare_and_hash_structurally():
    a = Point(latitude=1, longitude=2)
    b = Point(latitude=1, longitude=2)
    assert a == b
    assert hash(a) == hash(b)
    assert {a: "x"}[b] == "x"


def test_point_is_immutable():
    p = Point(latitude=1, longitude=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.latitude = 3  # type: ignore[misc]


def test_point_degrees():
    p = Point(latitude=407838351, longitude=-746143763)
    assert p.latitude_degrees == pytest.approx(40.7838351)
    assert p.longitude_degrees == pytest.approx(-74.6143763)


@pytest.mark.parametrize("kwargs", [{"latitude": 2 ** 31}, {"longitude": -(2 ** 31) - 1}])
def test_point_rejects_values_outside_int32(kwargs):
    with pytest.raises(InvalidCoordinateException) as ei:
        Point(**kwargs)
    assert ei.value.code == BusinessCode.PARAM_VALIDATION_ERROR
    assert ei.value.field in kwargs


def test_unnamed_feature_is_the_not_found_sentinel():
    loc = Point(latitude=1, longitude=1)
    feature = Feature.unnamed(loc)
    assert feature.name == ""
    assert feature.location == loc
    assert not feature.exists
    assert Feature(name="x", location=loc).exists


def test_route_summary_defaults_to_zero():
    assert RouteSummary() == RouteSummary(point_count=0, feature_count=0, distance=0, elapsed_time=0)
