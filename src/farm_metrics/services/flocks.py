"""Flock records and their health details."""

from dataclasses import dataclass, replace
from uuid import UUID, uuid4

from farm_metrics.domain.models import Flock, FlockDetail
from farm_metrics.domain.state import FarmState
from farm_metrics.services import metrics


@dataclass
class FlockService:
    """Service for flock composition."""

    state: FarmState

    def add_flock(self, name: str, bird_count: int, age_weeks: int) -> Flock:
        flock = Flock(
            id=uuid4(),
            name=name,
            bird_count=_count("bird_count", bird_count),
            age_weeks=_count("age_weeks", age_weeks),
        )
        self.state.flocks.append(flock)
        return flock

    def update_flock(self, flock_id: UUID, changes: dict[str, object]) -> Flock:
        """Replace editable fields of a flock."""
        flock = self.state.find_flock(flock_id)
        if flock is None:
            msg = f"Flock {flock_id} not found"
            raise LookupError(msg)
        editable = {
            key: value
            for key, value in changes.items()
            if key in {"name", "bird_count", "age_weeks"}
        }
        for key in editable.keys() & {"bird_count", "age_weeks"}:
            editable[key] = _count(key, editable[key])
        updated = replace(flock, **editable)
        self.state.flocks = [
            updated if item.id == flock_id else item for item in self.state.flocks
        ]
        return updated

    def flock_detail(self, flock_id: UUID) -> FlockDetail | None:
        return next(
            (d for d in self.state.flock_details if d.flock_id == flock_id), None
        )

    def update_flock_detail(
        self, flock_id: UUID, changes: dict[str, object]
    ) -> FlockDetail:
        """Update the detail of a flock, creating it on first use."""
        if self.state.find_flock(flock_id) is None:
            msg = f"Flock {flock_id} not found"
            raise LookupError(msg)
        editable = {
            key: value
            for key, value in changes.items()
            if key
            in {"health_status", "mortality_rate", "feed_conversion_ratio", "notes"}
        }
        for key in editable.keys() & {"mortality_rate", "feed_conversion_ratio"}:
            editable[key] = float(editable[key])
        existing = self.flock_detail(flock_id)
        if existing is None:
            detail = FlockDetail(
                id=uuid4(),
                flock_id=flock_id,
                health_status=str(editable.pop("health_status", "unknown")),
                mortality_rate=float(editable.pop("mortality_rate", 0.0)),
                feed_conversion_ratio=float(
                    editable.pop("feed_conversion_ratio", 0.0)
                ),
                notes=str(editable.pop("notes", "")),
            )
            self.state.flock_details.append(detail)
            return detail
        updated = replace(existing, **editable)
        self.state.flock_details = [
            updated if d.id == existing.id else d for d in self.state.flock_details
        ]
        return updated

    def total_birds(self) -> int:
        return metrics.total_birds(self.state)


def _count(name: str, value: object) -> int:
    number = int(value)
    if number < 0:
        msg = f"{name} must not be negative"
        raise ValueError(msg)
    return number
