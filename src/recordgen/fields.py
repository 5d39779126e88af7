"""Event-level fields keyed by record index only: city, channel, POS, amount, timestamp."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

from recordgen.hashing import tagged_hash
from recordgen.prng import RngFactory, SplitMix64
from recordgen.sampling import weighted_pick
from recordgen.schemas import DateSpread, GeneratorConfig

AMOUNT_UNIFORM_DRAWS = 12
AMOUNT_LOG_SCALE = 0.35
AMOUNT_LOG_SHIFT = 3.0

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def non_profile_fields(
    index: int, config: GeneratorConfig, rng_factory: RngFactory = SplitMix64
) -> tuple[str, str, str]:
    """Return (city, channel, point_of_sale), drawn in that order."""
    rng = rng_factory(tagged_hash("np", index))
    pools = config.pools
    city = weighted_pick(rng, pools.cities.values, pools.cities.weights)
    channel = weighted_pick(rng, pools.channels.values, pools.channels.weights)
    pos = weighted_pick(rng, pools.pos.values, pools.pos.weights)
    return city, channel, pos


def amount_for_index(index: int, rng_factory: RngFactory = SplitMix64) -> float:
    """
    Right-skewed purchase amount: Irwin-Hall approximation of a standard normal
    (12 uniforms - 6), scaled by 0.35, shifted by 3 and exponentiated. 2 dp.
    """
    rng = rng_factory(tagged_hash("amt", index))
    z = sum(rng.next_float() for _ in range(AMOUNT_UNIFORM_DRAWS)) - AMOUNT_UNIFORM_DRAWS / 2
    return round(math.exp(z * AMOUNT_LOG_SCALE + AMOUNT_LOG_SHIFT), 2)


def format_timestamp(ms: int) -> str:
    """UTC ISO-8601 with millisecond precision and Z suffix."""
    ts = _EPOCH + timedelta(milliseconds=ms)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def timestamp_for_index(index: int, date_spread: DateSpread) -> str:
    """Hash-derived offset into [start, end); no generator involved."""
    offset = tagged_hash("time", index) % date_spread.span_ms
    return format_timestamp(date_spread.start_ms + offset)
