"""Record assembler: index -> RawRecord, computed on demand with no stored state."""

from __future__ import annotations

from collections.abc import Iterator
from typing import overload

from recordgen.buckets import classify_bucket
from recordgen.distortions import distort_fields
from recordgen.fields import amount_for_index, non_profile_fields, timestamp_for_index
from recordgen.hashing import MASK64, fnv1a64, tagged_hash
from recordgen.logging_config import get_logger
from recordgen.profiles import build_profile
from recordgen.prng import RngFactory, SplitMix64
from recordgen.schemas import UINT64_SPACE, FrequencyBucket, GeneratorConfig, Profile, RawRecord

logger = get_logger(__name__)

VARIANT_MASK = 0xA5A5A5A5A5A5A5A5


def _check_uint64(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > MASK64:
        raise ValueError(f"{name} {value} outside [0, 2**64)")
    return value


def variant_for_index(
    index: int, repeat_multiplier: int, rng_factory: RngFactory = SplitMix64
) -> int:
    """Variant in [0, repeat_multiplier); always 0 for single-variant buckets."""
    if repeat_multiplier <= 1:
        return 0
    rng = rng_factory(fnv1a64(index ^ VARIANT_MASK))
    return rng.next_int(repeat_multiplier)


class IdempotentGenerator:
    """
    Stateless generator over an immutable GeneratorConfig.

    Every method is a pure function of its arguments and the config, so one
    instance can be shared by any number of threads without locking.
    """

    def __init__(self, config: GeneratorConfig, rng_factory: RngFactory = SplitMix64) -> None:
        self.config = config
        self.rng_factory = rng_factory
        logger.debug(
            "Generator ready: profile_space_size=%d buckets=%d",
            config.profile_space_size,
            len(config.buckets),
        )

    def profile_id_for_index(self, index: int) -> int:
        _check_uint64(index, "index")
        return fnv1a64(index) % self.config.profile_space_size

    def bucket_for_profile(self, profile_id: int) -> FrequencyBucket:
        _check_uint64(profile_id, "profile_id")
        return classify_bucket(profile_id, self.config.buckets, self.rng_factory)

    def profile_by_id(self, profile_id: int) -> Profile:
        _check_uint64(profile_id, "profile_id")
        return build_profile(profile_id, self.config, self.rng_factory)

    def record_by_index(self, index: int) -> RawRecord:
        profile_id = self.profile_id_for_index(index)
        bucket = classify_bucket(profile_id, self.config.buckets, self.rng_factory)
        variant_index = variant_for_index(index, bucket.repeat_multiplier, self.rng_factory)
        profile = build_profile(profile_id, self.config, self.rng_factory)
        distorted = distort_fields(
            profile, variant_index, self.config, tagged_hash("rec", index), self.rng_factory
        )
        city, channel, pos = non_profile_fields(index, self.config, self.rng_factory)
        return RawRecord(
            record_index=index,
            profile_id=profile_id,
            variant_index=variant_index,
            first_name=distorted.first_name,
            last_name=distorted.last_name,
            email=distorted.email,
            phone=distorted.phone,
            login=distorted.login,
            point_of_sale=pos,
            city=city,
            channel=channel,
            amount=amount_for_index(index, self.rng_factory),
            timestamp=timestamp_for_index(index, self.config.date_spread),
        )

    def iterate(self, start_inclusive: int, count: int) -> RecordRange:
        return RecordRange(self, start_inclusive, count)


class RecordRange:
    """Lazy, restartable view of records [start, start + count); nothing is cached."""

    def __init__(self, generator: IdempotentGenerator, start: int, count: int) -> None:
        _check_uint64(start, "start")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"count must be a non-negative int, got {count!r}")
        if start + count > UINT64_SPACE:
            raise ValueError(f"range [{start}, {start + count}) runs past 2**64")
        self.generator = generator
        self.start = start
        self.count = count

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[RawRecord]:
        for offset in range(self.count):
            yield self.generator.record_by_index(self.start + offset)

    @overload
    def __getitem__(self, i: int) -> RawRecord: ...

    @overload
    def __getitem__(self, i: slice) -> list[RawRecord]: ...

    def __getitem__(self, i: int | slice) -> RawRecord | list[RawRecord]:
        if isinstance(i, slice):
            indices = range(*i.indices(self.count))
            return [self.generator.record_by_index(self.start + j) for j in indices]
        if i < 0:
            i += self.count
        if not 0 <= i < self.count:
            raise IndexError("record range index out of range")
        return self.generator.record_by_index(self.start + i)

    def __repr__(self) -> str:
        return f"RecordRange(start={self.start}, count={self.count})"
