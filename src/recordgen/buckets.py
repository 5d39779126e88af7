"""Frequency bucket classification: how often a profile recurs."""

from __future__ import annotations

from collections.abc import Sequence

from recordgen.hashing import fnv1a64
from recordgen.prng import RngFactory, SplitMix64
from recordgen.schemas import FrequencyBucket


def classify_bucket(
    profile_id: int,
    buckets: Sequence[FrequencyBucket],
    rng_factory: RngFactory = SplitMix64,
) -> FrequencyBucket:
    """Bucket for `profile_id`; seeded by the profile id alone, so it never changes."""
    if not buckets:
        raise ValueError("at least one frequency bucket is required")
    rng = rng_factory(fnv1a64(profile_id))
    r = rng.next_float() * sum(b.weight for b in buckets)
    for b in buckets:
        r -= b.weight
        if r <= 0:
            return b
    return buckets[-1]
