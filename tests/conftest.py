"""Pytest fixtures: generator configs, a shared generator, a config file on disk."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Tests never pick up a developer's environment overrides.
for _var in ("RECGEN_CONFIG_PATH", "RECGEN_PROFILE_SPACE_SIZE", "RECGEN_LOG_LEVEL", "RECGEN_ENV"):
    os.environ.pop(_var, None)

from recordgen.config import _deep_merge, _default_config
from recordgen.generator import IdempotentGenerator
from recordgen.prng import BitGenerator
from recordgen.schemas import GeneratorConfig


class ScriptedRng(BitGenerator):
    """Bit generator that replays fixed floats; next_int/next_float follow the base class."""

    def __init__(self, floats: list[float]) -> None:
        self.floats = list(floats)
        self.calls = 0

    def next_uint64(self) -> int:
        raise AssertionError("ScriptedRng only scripts float draws")

    def next_float(self) -> float:
        self.calls += 1
        return self.floats.pop(0)


@pytest.fixture
def scripted_rng() -> type[ScriptedRng]:
    return ScriptedRng


@pytest.fixture
def make_config() -> Callable[..., GeneratorConfig]:
    """Factory: default generator section deep-merged with the given overrides."""

    def _make(**overrides: Any) -> GeneratorConfig:
        raw = _deep_merge(_default_config()["generator"], overrides)
        return GeneratorConfig.model_validate(raw)

    return _make


@pytest.fixture
def gen_config(make_config) -> GeneratorConfig:
    return make_config()


@pytest.fixture
def generator(gen_config: GeneratorConfig) -> IdempotentGenerator:
    return IdempotentGenerator(gen_config)


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    """Return path to a temporary config dir with default.yaml (small profile space)."""
    cfg_dir = tmp_path / "config"
    cfg_dir.mkdir()
    (cfg_dir / "default.yaml").write_text(
        """
app:
  log_level: WARNING
generator:
  profile_space_size: 1000
  distortions:
    swap_first_last: 0.1
    transliterate: 0.1
    typo: 0.1
  date_spread:
    start: "2025-01-01T00:00:00Z"
    end: "2025-02-01T00:00:00Z"
api:
  max_page_size: 50
""",
        encoding="utf-8",
    )
    return str(cfg_dir / "default.yaml")
