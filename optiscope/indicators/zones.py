"""Swing-point detection and demand/supply zone clustering.

A swing low strictly below every neighbour within ``lookback`` periods on
both sides marks demand; a swing high marks supply. Swing points of one
kind are clustered in index order: a point within ``tolerance`` (relative to
a zone's anchor price) of an existing zone adds a touch to it, otherwise it
opens a new zone anchored at its own price.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .base import PriceInput, as_series, check_same_length, validate_period

logger = logging.getLogger(__name__)


class SwingKind(str, Enum):
    HIGH = "high"
    LOW = "low"


class ZoneKind(str, Enum):
    DEMAND = "demand"
    SUPPLY = "supply"


@dataclass(frozen=True)
class SwingPoint:
    """A local extremum at ``index``."""

    index: int
    price: float
    kind: SwingKind


@dataclass
class Zone:
    """A price level touched repeatedly by swing points.

    Attributes:
        price: Anchor price (the first swing point's price, never re-centred)
        touches: Number of swing points clustered into the zone
        start_period_key: Period key of the first touch
        end_period_key: Period key of the latest touch
        kind: Demand (swing lows) or supply (swing highs)
        end_index: Position of the latest touch in the input series
    """

    price: float
    touches: int
    start_period_key: str
    end_period_key: str
    kind: ZoneKind
    end_index: int = -1


@dataclass
class ZoneSet:
    """Demand and supply zones, each ordered by most recent touch first."""

    demand: list[Zone] = field(default_factory=list)
    supply: list[Zone] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.demand and not self.supply


def find_swing_points(prices: PriceInput, lookback: int = 5) -> list[SwingPoint]:
    """Find swing highs and lows.

    Only indices with ``lookback`` neighbours on each side are considered.
    A point is a swing high when it is strictly greater than all
    ``2 * lookback`` neighbours and a swing low when strictly less. An
    absent value never qualifies and disqualifies its neighbours.

    Args:
        prices: Per-period values
        lookback: Neighbours checked on each side

    Returns:
        Swing points in index order
    """
    validate_period(lookback, "lookback")
    values = as_series(prices).to_numpy()
    points: list[SwingPoint] = []

    for i in range(lookback, len(values) - lookback):
        window = values[i - lookback: i + lookback + 1]
        if np.isnan(window).any():
            continue
        current = values[i]
        neighbours = np.delete(window, lookback)
        if (neighbours < current).all():
            points.append(SwingPoint(i, float(current), SwingKind.HIGH))
        elif (neighbours > current).all():
            points.append(SwingPoint(i, float(current), SwingKind.LOW))

    return points


def cluster_swing_points(
    points: Sequence[SwingPoint],
    period_keys: Sequence[str],
    kind: ZoneKind,
    tolerance: float = 0.02,
) -> list[Zone]:
    """Cluster swing points of one kind into zones, in index order.

    Each point joins the first existing zone whose anchor price lies within
    ``tolerance`` of it (relative to the anchor); otherwise it opens a new
    zone.
    """
    zones: list[Zone] = []
    for point in points:
        key = str(period_keys[point.index])
        for zone in zones:
            if abs(point.price - zone.price) <= tolerance * abs(zone.price):
                zone.touches += 1
                zone.end_period_key = key
                zone.end_index = point.index
                break
        else:
            zones.append(Zone(point.price, 1, key, key, kind, point.index))
    return zones


def _rank(zones: list[Zone], min_touches: int, max_zones: int) -> list[Zone]:
    strong = [zone for zone in zones if zone.touches >= min_touches]
    # Position, not key text: "10" sorts before "9"
    strong = sorted(strong, key=lambda zone: zone.end_index, reverse=True)
    return strong[:max_zones]


def detect_zones(
    prices: PriceInput,
    period_keys: Sequence[str],
    lookback: int = 5,
    min_touches: int = 2,
    tolerance: float = 0.02,
    max_zones: int = 5,
) -> ZoneSet:
    """Detect demand and supply zones.

    Args:
        prices: Per-period values
        period_keys: ISO period key for each value
        lookback: Swing point neighbourhood on each side
        min_touches: Minimum touches for a zone to be kept
        tolerance: Relative distance from a zone's anchor to count as a touch
        max_zones: Zones kept per kind, most recent touch first

    Returns:
        ZoneSet with demand (from swing lows) and supply (from swing highs)

    Raises:
        ValueError: If prices and period keys differ in length
    """
    check_same_length(prices=prices, period_keys=period_keys)
    validate_period(lookback, "lookback")
    if len(prices) < 2 * lookback:
        logger.debug("Zone detection skipped: %d periods < %d", len(prices), 2 * lookback)
        return ZoneSet()

    points = find_swing_points(prices, lookback)
    lows = [p for p in points if p.kind is SwingKind.LOW]
    highs = [p for p in points if p.kind is SwingKind.HIGH]

    demand = cluster_swing_points(lows, period_keys, ZoneKind.DEMAND, tolerance)
    supply = cluster_swing_points(highs, period_keys, ZoneKind.SUPPLY, tolerance)

    result = ZoneSet(
        demand=_rank(demand, min_touches, max_zones),
        supply=_rank(supply, min_touches, max_zones),
    )
    logger.debug(
        "Zones: %d swing lows -> %d demand, %d swing highs -> %d supply",
        len(lows), len(result.demand), len(highs), len(result.supply),
    )
    return result
