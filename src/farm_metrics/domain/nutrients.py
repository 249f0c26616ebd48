"""Nutrient key registry."""

import re
from dataclasses import dataclass, field

CORE_NUTRIENTS: dict[str, str] = {
    "protein": "Protein",
    "fat": "Fat",
    "fiber": "Fiber",
    "calcium": "Calcium",
    "umami": "Umami",
    "amino": "Amino acids",
}

_WHITESPACE = re.compile(r"\s+")


def nutrient_key(label: str) -> str:
    """Normalize a display label into a nutrient key."""
    return _WHITESPACE.sub("_", label.strip().lower())


@dataclass
class NutrientRegistry:
    """Ordered set of nutrient keys with labels and visibility flags."""

    labels: dict[str, str] = field(default_factory=lambda: dict(CORE_NUTRIENTS))
    visible: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(CORE_NUTRIENTS, True)
    )

    def keys(self) -> list[str]:
        """Return every registered key in registration order."""
        return list(self.labels)

    def visible_keys(self) -> list[str]:
        """Return the keys currently shown in aggregations."""
        return [key for key in self.labels if self.visible.get(key, True)]

    def label(self, key: str) -> str:
        """Return the display label for a key, falling back to the key."""
        return self.labels.get(key, key)

    def is_core(self, key: str) -> bool:
        return key in CORE_NUTRIENTS

    def register(self, key: str, label: str) -> bool:
        """Register a key; return False if it already exists."""
        if key in self.labels:
            return False
        self.labels[key] = label
        self.visible[key] = True
        return True

    def unregister(self, key: str) -> bool:
        """Remove a custom key; core keys and unknown keys are refused."""
        if self.is_core(key) or key not in self.labels:
            return False
        del self.labels[key]
        self.visible.pop(key, None)
        return True
