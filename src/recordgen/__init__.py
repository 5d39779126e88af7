"""Idempotent synthetic record generator: records computed on demand from an index."""

__version__ = "0.1.0"

from recordgen.generator import IdempotentGenerator, RecordRange  # noqa: E402
from recordgen.schemas import (  # noqa: E402
    DateSpread,
    DistortionRates,
    FrequencyBucket,
    GeneratorConfig,
    Pools,
    Profile,
    RawRecord,
    WeightedPool,
)

__all__ = [
    "__version__",
    "DateSpread",
    "DistortionRates",
    "FrequencyBucket",
    "GeneratorConfig",
    "IdempotentGenerator",
    "Pools",
    "Profile",
    "RawRecord",
    "RecordRange",
    "WeightedPool",
]
