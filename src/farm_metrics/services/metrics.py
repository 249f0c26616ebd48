"""Derived feed cost, nutrition and egg economics metrics.

Every function here is a pure read over a :class:`FarmState`; nothing is
cached, so results always reflect the current records.
"""

import math
from datetime import UTC, datetime
from uuid import UUID

from farm_metrics.domain.metrics import (
    EggEconomics,
    FeedCostShare,
    FeedNutritionShare,
    MonthlyNutritionRow,
)
from farm_metrics.domain.models import Feed, Purchase
from farm_metrics.domain.state import FarmState

MONTHS_IN_YEAR = 12


def monthly_purchases(
    state: FarmState, month: int, year: int | None = None
) -> list[Purchase]:
    """Return purchases dated within a calendar month."""
    resolved_year = year if year is not None else datetime.now(tz=UTC).year
    return [
        purchase
        for purchase in state.purchases
        if purchase.purchase_date.year == resolved_year
        and purchase.purchase_date.month == month
    ]


def purchase_cost(feed: Feed, purchase: Purchase) -> float:
    """Cost a purchase contributes to the diet mix."""
    return feed.unit_cost * purchase.quantity * (purchase.feeding_ratio / 100)


def total_cost(state: FarmState, month: int, year: int | None = None) -> float:
    """Sum the weighted feed cost of a month.

    Purchases whose feed no longer exists contribute nothing.
    """
    total = 0.0
    for purchase, feed in _with_feeds(state, monthly_purchases(state, month, year)):
        total += purchase_cost(feed, purchase)
    return total


def feed_cost_percentage(
    state: FarmState, month: int, year: int | None = None
) -> list[FeedCostShare]:
    """Return per-feed cost and share of the month's total, largest first."""
    total = total_cost(state, month, year)
    if total == 0:
        return []

    costs: dict[UUID, float] = {}
    names: dict[UUID, str] = {}
    for purchase, feed in _with_feeds(state, monthly_purchases(state, month, year)):
        costs[feed.id] = costs.get(feed.id, 0.0) + purchase_cost(feed, purchase)
        names[feed.id] = feed.name

    shares = [
        FeedCostShare(
            name=names[feed_id],
            value=value,
            percent=round(value / total * 100, 1),
        )
        for feed_id, value in costs.items()
    ]
    return sorted(shares, key=lambda share: share.value, reverse=True)


def nutrition_contribution(
    state: FarmState, month: int, year: int | None = None
) -> dict[str, float]:
    """Return the ratio-weighted average percentage of each visible nutrient."""
    keys = state.nutrients.visible_keys()
    totals = dict.fromkeys(keys, 0.0)
    total_weight = 0.0
    for purchase, feed in _with_feeds(state, monthly_purchases(state, month, year)):
        weight = _weighted_quantity(purchase)
        total_weight += weight
        for key in keys:
            totals[key] += feed.nutrients.get(key, 0.0) * weight

    if total_weight == 0:
        return dict.fromkeys(keys, 0.0)
    return {key: value / total_weight for key, value in totals.items()}


def feed_nutrition_shares(
    state: FarmState, month: int, year: int | None = None
) -> list[FeedNutritionShare]:
    """Return how much of each visible nutrient every bought feed supplies."""
    keys = state.nutrients.visible_keys()
    amounts: dict[UUID, dict[str, float]] = {}
    names: dict[UUID, str] = {}
    totals = dict.fromkeys(keys, 0.0)
    for purchase, feed in _with_feeds(state, monthly_purchases(state, month, year)):
        weight = _weighted_quantity(purchase)
        feed_amounts = amounts.setdefault(feed.id, dict.fromkeys(keys, 0.0))
        names[feed.id] = feed.name
        for key in keys:
            amount = feed.nutrients.get(key, 0.0) * weight
            feed_amounts[key] += amount
            totals[key] += amount

    return [
        FeedNutritionShare(
            name=names[feed_id],
            shares={key: _percent(values[key], totals[key]) for key in keys},
        )
        for feed_id, values in amounts.items()
    ]


def monthly_nutrition_table(
    state: FarmState, year: int | None = None
) -> list[MonthlyNutritionRow]:
    """Return nutrition composition and cost for every month of a year."""
    rows = []
    for month in range(1, MONTHS_IN_YEAR + 1):
        nutrients = nutrition_contribution(state, month, year)
        rows.append(
            MonthlyNutritionRow(
                month=month,
                nutrients={key: round(value, 2) for key, value in nutrients.items()},
                total_cost=total_cost(state, month, year),
            )
        )
    return rows


def egg_unit_cost(state: FarmState, year: int | None = None) -> float:
    """Feed cost per egg for the selected month."""
    eggs = state.egg_settings.egg_count
    if eggs <= 0:
        return 0.0
    return total_cost(state, state.current_month, year) / eggs


def break_even_eggs(state: FarmState, year: int | None = None) -> int:
    """Minimum eggs to sell at the current price to cover feed cost."""
    price = state.egg_settings.egg_price
    if price <= 0:
        return 0
    return math.ceil(total_cost(state, state.current_month, year) / price)


def profit(state: FarmState, year: int | None = None) -> float:
    """Egg revenue minus feed cost for the selected month."""
    return _revenue(state) - total_cost(state, state.current_month, year)


def profit_margin(state: FarmState, year: int | None = None) -> float:
    """Profit as a percentage of egg revenue; 0 without revenue."""
    revenue = _revenue(state)
    if revenue == 0:
        return 0.0
    return profit(state, year) / revenue * 100


def egg_economics(state: FarmState, year: int | None = None) -> EggEconomics:
    """Bundle the egg cost and profit figures for the selected month."""
    return EggEconomics(
        total_cost=total_cost(state, state.current_month, year),
        egg_unit_cost=egg_unit_cost(state, year),
        break_even_eggs=break_even_eggs(state, year),
        profit=profit(state, year),
        profit_margin=profit_margin(state, year),
    )


def _revenue(state: FarmState) -> float:
    return state.egg_settings.egg_count * state.egg_settings.egg_price


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


def _weighted_quantity(purchase: Purchase) -> float:
    return purchase.quantity * (purchase.feeding_ratio / 100)


def _with_feeds(
    state: FarmState, purchases: list[Purchase]
) -> list[tuple[Purchase, Feed]]:
    feeds = {feed.id: feed for feed in state.feeds}
    return [
        (purchase, feeds[purchase.feed_id])
        for purchase in purchases
        if purchase.feed_id in feeds
    ]


def total_birds(state: FarmState) -> int:
    return sum(flock.bird_count for flock in state.flocks)


def laying_rate(state: FarmState) -> float:
    """Daily egg output per bird in percent, one decimal; 0 without birds."""
    birds = total_birds(state)
    if birds <= 0:
        return 0.0
    return round(state.egg_settings.daily_egg_production / birds * 100, 1)
