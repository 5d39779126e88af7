"""Configuration loading from YAML + environment overrides."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from recordgen.schemas import GeneratorConfig


def _load_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _pool_overrides_replace_weights(override: dict[str, Any]) -> dict[str, Any]:
    """A pool override that lists values without weights is uniform, not merged with defaults."""
    pools = (override.get("generator") or {}).get("pools") or {}
    for pool in pools.values():
        if isinstance(pool, dict) and "values" in pool and "weights" not in pool:
            pool["weights"] = None
    return override


class AppSettings(BaseSettings):
    """App-level settings with env override."""

    model_config = SettingsConfigDict(
        env_prefix="RECGEN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    config_path: str = Field(default="config/default.yaml", alias="RECGEN_CONFIG_PATH")
    log_level: str = Field(default="INFO", alias="RECGEN_LOG_LEVEL")
    profile_space_size: int | None = Field(default=None, alias="RECGEN_PROFILE_SPACE_SIZE")


def get_config(config_path: str | None = None) -> dict[str, Any]:
    """Load merged config (defaults <- YAML <- dev.yaml <- env overrides)."""
    settings = AppSettings()
    path = config_path or settings.config_path
    base = _default_config()
    if Path(path).exists():
        base = _deep_merge(base, _pool_overrides_replace_weights(_load_yaml(path)))
        config_dir = Path(path).parent
        if Path(path).name == "default.yaml":
            dev_path = config_dir / "dev.yaml"
            if dev_path.exists() and os.environ.get("RECGEN_ENV") == "dev":
                base = _deep_merge(base, _pool_overrides_replace_weights(_load_yaml(dev_path)))
    if settings.profile_space_size is not None:
        base.setdefault("generator", {})["profile_space_size"] = settings.profile_space_size
    if os.environ.get("RECGEN_LOG_LEVEL"):
        base.setdefault("app", {})["log_level"] = settings.log_level
    return base


def load_generator_config(config_path: str | None = None) -> GeneratorConfig:
    """Validate the `generator` section into an immutable GeneratorConfig.
    Raises pydantic.ValidationError (a ValueError) on empty pools, bad ranges, etc."""
    return GeneratorConfig.model_validate(get_config(config_path).get("generator") or {})


def default_generator_config() -> GeneratorConfig:
    return GeneratorConfig.model_validate(_default_config()["generator"])


def _default_config() -> dict[str, Any]:
    return {
        "app": {"name": "recordgen", "log_level": "INFO"},
        "generator": {
            "profile_space_size": 10**12,
            "buckets": [
                {"weight": 90, "repeat_multiplier": 1},
                {"weight": 8, "repeat_multiplier": 3},
                {"weight": 2, "repeat_multiplier": 10},
            ],
            "distortions": {
                "swap_first_last": 0.03,
                "transliterate": 0.08,
                "typo": 0.05,
                "typo_swap": False,
            },
            "date_spread": {
                "start": "2024-01-01T00:00:00Z",
                "end": "2026-01-01T00:00:00Z",
            },
            "locale": {"primary": "ru", "secondary": "en", "secondary_rate": 0.3},
            "pools": {
                "first_names": {
                    "values": [
                        "Анна",
                        "Мария",
                        "Иван",
                        "Алексей",
                        "София",
                        "Дмитрий",
                        "Елена",
                        "Сергей",
                        "Павел",
                        "Ольга",
                    ],
                    "weights": [8, 7, 7, 6, 6, 6, 5, 5, 4, 4],
                },
                "last_names": {
                    "values": [
                        "Иванов",
                        "Петров",
                        "Сидоров",
                        "Смирнов",
                        "Кузнецов",
                        "Попов",
                        "Соколов",
                        "Лебедев",
                        "Семенов",
                        "Козлов",
                    ]
                },
                "cities": {
                    "values": [
                        "Москва",
                        "Санкт-Петербург",
                        "Новосибирск",
                        "Екатеринбург",
                        "Казань",
                        "Минск",
                        "Алматы",
                    ]
                },
                "channels": {"values": ["web", "mobile", "offline", "callcenter"]},
                "pos": {"values": ["store-001", "store-002", "kiosk-01", "partner-az"]},
            },
        },
        "export": {"progress_every": 100_000},
        "api": {"host": "0.0.0.0", "port": 8000, "max_page_size": 1000},
    }


def get_config_hash(config: dict[str, Any]) -> str:
    """SHA256 of resolved config for reproducibility (canonical key order)."""
    canonical = yaml.dump(config, default_flow_style=False, sort_keys=True, allow_unicode=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
