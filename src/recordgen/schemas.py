"""Pydantic v2 config schema and the generated data types."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UINT64_SPACE = 1 << 64


# --- Configuration ---
class FrequencyBucket(BaseModel):
    """One recurrence tier: selected proportional to weight; bounds distinct variants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    weight: int = Field(..., ge=0)
    repeat_multiplier: int = Field(..., ge=1)


class DistortionRates(BaseModel):
    """Independent per-record probabilities; values outside [0, 1] are clamped."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    swap_first_last: float = Field(default=0.03, allow_inf_nan=False)
    transliterate: float = Field(default=0.08, allow_inf_nan=False)
    typo: float = Field(default=0.05, allow_inf_nan=False)
    typo_swap: bool = False  # adds adjacent-character swap to the typo operations

    @field_validator("swap_first_last", "transliterate", "typo")
    @classmethod
    def clamp01(cls, v: float) -> float:
        return max(0.0, min(1.0, v))


class DateSpread(BaseModel):
    """Timestamp range [start, end); naive datetimes are taken as UTC."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: datetime = datetime(2024, 1, 1, tzinfo=UTC)
    end: datetime = datetime(2026, 1, 1, tzinfo=UTC)

    @field_validator("start", "end")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # timestamps are whole milliseconds; a finer start would round below the range
        if v.microsecond % 1000:
            raise ValueError(f"date_spread bound {v.isoformat()} has sub-millisecond precision")
        return v.astimezone(UTC) if v.tzinfo is not None else v.replace(tzinfo=UTC)

    @model_validator(mode="after")
    def check_range(self) -> DateSpread:
        if self.span_ms <= 0:
            raise ValueError(
                f"date_spread.end ({self.end.isoformat()}) must be after "
                f"date_spread.start ({self.start.isoformat()}) by at least 1 ms"
            )
        return self

    @property
    def start_ms(self) -> int:
        return _epoch_ms(self.start)

    @property
    def span_ms(self) -> int:
        return _epoch_ms(self.end) - _epoch_ms(self.start)


def _epoch_ms(ts: datetime) -> int:
    delta = ts - datetime(1970, 1, 1, tzinfo=UTC)
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


class LocaleConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    primary: str = "ru"
    secondary: str = "en"
    secondary_rate: float = Field(default=0.3, ge=0.0, le=1.0)


class WeightedPool(BaseModel):
    """Values with optional parallel non-negative weights (uniform when omitted)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    values: tuple[str, ...]
    weights: tuple[float, ...] | None = None

    @field_validator("weights")
    @classmethod
    def empty_weights_mean_uniform(cls, v: tuple[float, ...] | None) -> tuple[float, ...] | None:
        return v or None

    @model_validator(mode="after")
    def check_pool(self) -> WeightedPool:
        if not self.values:
            raise ValueError("pool must contain at least one value")
        if self.weights is not None:
            if len(self.weights) != len(self.values):
                raise ValueError(
                    f"pool has {len(self.values)} values but {len(self.weights)} weights"
                )
            if any(w < 0 for w in self.weights):
                raise ValueError("pool weights must be non-negative")
            if sum(self.weights) <= 0:
                raise ValueError("pool weights must not all be zero")
        return self


class Pools(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    first_names: WeightedPool
    last_names: WeightedPool
    cities: WeightedPool
    channels: WeightedPool
    pos: WeightedPool


class GeneratorConfig(BaseModel):
    """Immutable generator configuration; all generation is a pure function of (index, config)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    profile_space_size: int = Field(default=10**12, gt=0, le=UINT64_SPACE)
    buckets: tuple[FrequencyBucket, ...] = Field(
        default=(
            FrequencyBucket(weight=90, repeat_multiplier=1),
            FrequencyBucket(weight=8, repeat_multiplier=3),
            FrequencyBucket(weight=2, repeat_multiplier=10),
        ),
        min_length=1,
    )
    distortions: DistortionRates = DistortionRates()
    date_spread: DateSpread = DateSpread()
    locale: LocaleConfig = LocaleConfig()
    pools: Pools

    @field_validator("buckets")
    @classmethod
    def buckets_total_weight(cls, v: tuple[FrequencyBucket, ...]) -> tuple[FrequencyBucket, ...]:
        if sum(b.weight for b in v) <= 0:
            raise ValueError("bucket weights must sum to a positive value")
        return v


# --- Generated data ---
@dataclass(frozen=True)
class Profile:
    """Synthetic identity derived from a profile id; recomputed on every access."""

    profile_id: int
    first_name: str
    last_name: str
    phones: tuple[str, ...]
    emails: tuple[str, ...]
    logins: tuple[str, ...]
    locale: str

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for k in ("phones", "emails", "logins"):
            d[k] = list(d[k])
        return d


@dataclass(frozen=True)
class RawRecord:
    """One generated record; its identity is record_index."""

    record_index: int
    profile_id: int
    variant_index: int
    first_name: str
    last_name: str
    email: str
    phone: str
    login: str
    point_of_sale: str
    city: str
    channel: str
    amount: float
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
