"""JSON-file backed, read-only repository for named features."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.logging_config import get_logger
from domain.common.exceptions import BusinessException, FeatureDatabaseException
from domain.route_guide import Feature, FeatureRepository, Point


logger = get_logger(__name__)


class _LocationRecord(BaseModel):
    latitude: int = 0
    longitude: int = 0


class _FeatureRecord(BaseModel):
    name: str = ""
    location: _LocationRecord


_records_adapter = TypeAdapter(list[_FeatureRecord])


class InMemoryFeatureRepository(FeatureRepository):
    """Holds a fixed feature collection; never mutated after construction."""

    def __init__(self, features: Iterable[Feature]) -> None:
        self._features: tuple[Feature, ...] = tuple(features)

    def list_all(self) -> Sequence[Feature]:  # type: ignore[override]
        return self._features

    def find_by_location(self, point: Point) -> Optional[Feature]:  # type: ignore[override]
        for feature in self._features:
            if feature.location == point:
                return feature
        return None

    def __len__(self) -> int:
        return len(self._features)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryFeatureRepository":
        """Load the feature database document.

        The document is a JSON array of
        ``{"name": str, "location": {"latitude": int, "longitude": int}}``.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise FeatureDatabaseException(str(path), str(exc)) from exc
        try:
            records = _records_adapter.validate_json(raw)
            features = [
                Feature(
                    name=r.name,
                    location=Point(latitude=r.location.latitude, longitude=r.location.longitude),
                )
                for r in records
            ]
        except ValidationError as exc:
            raise FeatureDatabaseException(str(path), f"{exc.error_count()} invalid record(s)") from exc
        except BusinessException as exc:
            raise FeatureDatabaseException(str(path), exc.message) from exc

        logger.info(
            "feature_db_loaded",
            path=str(path),
            total=len(features),
            named=sum(1 for f in features if f.exists),
        )
        return cls(features)
