"""Feed catalog and nutrient key management."""

import logging
from dataclasses import dataclass, replace
from uuid import UUID, uuid4

from farm_metrics.domain.models import DeleteResult, Feed
from farm_metrics.domain.nutrients import nutrient_key
from farm_metrics.domain.state import FarmState

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = frozenset({"name", "unit_cost", "unit"})


@dataclass
class CatalogService:
    """Feeds and the nutrient keys every feed carries."""

    state: FarmState

    def add_feed(
        self,
        name: str,
        unit_cost: float,
        unit: str,
        nutrients: dict[str, float] | None = None,
    ) -> Feed:
        """Create a feed with a value for every registered nutrient."""
        feed = Feed(
            id=uuid4(),
            name=name,
            unit_cost=_unit_cost(unit_cost),
            unit=unit,
            nutrients=self._complete_nutrients(nutrients or {}),
        )
        self.state.feeds.append(feed)
        return feed

    def update_feed(self, feed_id: UUID, changes: dict[str, object]) -> Feed:
        """Replace editable fields of a feed."""
        feed = self.get_feed(feed_id)
        if feed is None:
            msg = f"Feed {feed_id} not found"
            raise LookupError(msg)
        editable = {
            key: value
            for key, value in changes.items()
            if key in {"name", "unit_cost", "unit"}
        }
        if "unit_cost" in editable:
            editable["unit_cost"] = _unit_cost(editable["unit_cost"])
        raw_nutrients = changes.get("nutrients")
        if isinstance(raw_nutrients, dict):
            merged = {**feed.nutrients, **raw_nutrients}
            editable["nutrients"] = self._complete_nutrients(merged)
        updated = replace(feed, **editable)
        self.state.feeds = [
            updated if item.id == feed_id else item for item in self.state.feeds
        ]
        return updated

    def delete_feed(self, feed_id: UUID) -> DeleteResult:
        """Delete a feed unless a purchase still references it."""
        if self.get_feed(feed_id) is None:
            return DeleteResult(deleted=False, reason="not_found")
        if any(purchase.feed_id == feed_id for purchase in self.state.purchases):
            logger.info("Refusing to delete feed %s: referenced by purchases", feed_id)
            return DeleteResult(deleted=False, reason="in_use")
        self.state.feeds = [feed for feed in self.state.feeds if feed.id != feed_id]
        return DeleteResult(deleted=True)

    def get_feed(self, feed_id: UUID) -> Feed | None:
        return self.state.find_feed(feed_id)

    def sorted_feeds(
        self, key: str | None = None, descending: bool = False
    ) -> list[Feed]:
        """Return feeds ordered by a field, or in insertion order."""
        if key is None:
            return list(self.state.feeds)
        if key not in SORTABLE_FIELDS:
            msg = f"Cannot sort feeds by {key}"
            raise ValueError(msg)
        return sorted(
            self.state.feeds, key=lambda feed: getattr(feed, key), reverse=descending
        )

    def add_nutrient(self, label: str) -> str | None:
        """Register a custom nutrient and add it to every feed with value 0.

        Returns the new key, or None when the label is blank or already taken.
        """
        if not label.strip():
            return None
        key = nutrient_key(label)
        if not self.state.nutrients.register(key, label.strip()):
            return None
        self.state.feeds = [
            replace(feed, nutrients={**feed.nutrients, key: 0.0})
            for feed in self.state.feeds
        ]
        logger.info("Registered nutrient %s", key)
        return key

    def remove_nutrient(self, key: str) -> bool:
        """Remove a custom nutrient from the registry and from every feed."""
        if not self.state.nutrients.unregister(key):
            return False
        self.state.feeds = [
            replace(
                feed,
                nutrients={
                    name: value for name, value in feed.nutrients.items() if name != key
                },
            )
            for feed in self.state.feeds
        ]
        return True

    def toggle_nutrient_visibility(self, key: str) -> bool:
        """Flip whether a nutrient takes part in aggregations."""
        registry = self.state.nutrients
        if key not in registry.labels:
            msg = f"Unknown nutrient: {key}"
            raise LookupError(msg)
        registry.visible[key] = not registry.visible.get(key, True)
        return registry.visible[key]

    def nutrient_label(self, key: str) -> str:
        return self.state.nutrients.label(key)

    def align_feed_nutrients(self) -> None:
        """Register every nutrient found on feeds and give each feed every key."""
        feeds = [
            replace(feed, nutrients=_normalized(feed.nutrients))
            for feed in self.state.feeds
        ]
        for feed in feeds:
            for key in feed.nutrients:
                self.state.nutrients.register(key, key)
        keys = self.state.nutrients.keys()
        self.state.feeds = [
            replace(
                feed,
                nutrients={key: feed.nutrients.get(key, 0.0) for key in keys},
            )
            for feed in feeds
        ]

    def _complete_nutrients(self, nutrients: dict[str, float]) -> dict[str, float]:
        normalized = _normalized(nutrients)
        labels = {nutrient_key(raw): raw.strip() for raw in nutrients}
        added = [
            key
            for key in normalized
            if self.state.nutrients.register(key, labels.get(key, key))
        ]
        if added:
            self.state.feeds = [
                replace(feed, nutrients={**dict.fromkeys(added, 0.0), **feed.nutrients})
                for feed in self.state.feeds
            ]
        return {key: normalized.get(key, 0.0) for key in self.state.nutrients.keys()}


def _normalized(nutrients: dict[str, float]) -> dict[str, float]:
    """Normalize nutrient keys and validate their percentages."""
    normalized: dict[str, float] = {}
    for raw, value in nutrients.items():
        key = nutrient_key(raw)
        if not key:
            msg = "Nutrient name must not be blank"
            raise ValueError(msg)
        percent = float(value)
        if percent < 0:
            msg = f"Nutrient {key} must not be negative"
            raise ValueError(msg)
        normalized[key] = percent
    return normalized


def _unit_cost(value: object) -> float:
    cost = float(value)
    if cost < 0:
        msg = "Unit cost must not be negative"
        raise ValueError(msg)
    return cost
