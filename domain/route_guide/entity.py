"""
路线指南领域实体 - 坐标、矩形区域、地点、路线留言与路线统计
"""
from dataclasses import dataclass

from domain.common.exceptions import InvalidCoordinateException


# Coordinates are degrees multiplied by this factor and stored as integers.
COORD_FACTOR = 10_000_000

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class Point:
    """定点编码的经纬度坐标（度 × 10^7）"""

    latitude: int = 0
    longitude: int = 0

    def __post_init__(self):
        """业务规则：坐标必须可以用有符号 32 位整数表示"""
        for field in ("latitude", "longitude"):
            value = getattr(self, field)
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise InvalidCoordinateException(field, value)

    @property
    def latitude_degrees(self) -> float:
        return self.latitude / COORD_FACTOR

    @property
    def longitude_degrees(self) -> float:
        return self.longitude / COORD_FACTOR


@dataclass(frozen=True)
class Rectangle:
    """矩形区域；lo/hi 不要求已规范化"""

    lo: Point
    hi: Point


@dataclass(frozen=True)
class Feature:
    """命名地点；name 为空表示该位置没有地点"""

    name: str
    location: Point

    @property
    def exists(self) -> bool:
        return bool(self.name)

    @classmethod
    def unnamed(cls, location: Point) -> "Feature":
        return cls(name="", location=location)


@dataclass(frozen=True)
class RouteNote:
    location: Point
    message: str


@dataclass(frozen=True)
class RouteSummary:
    """一次 RecordRoute 调用的统计结果"""

    point_count: int = 0
    feature_count: int = 0
    distance: int = 0
    elapsed_time: int = 0
