import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, HttpUrl, ValidationError

from bolus_ledger.models.dosing import DosingParameters


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class SecurityConfig(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class CatalogConfig(BaseModel):
    seed_sample_products: bool = True


class OpenFoodFactsConfig(BaseModel):
    base_url: HttpUrl = Field(default="https://world.openfoodfacts.org", validate_default=True)
    timeout_seconds: float = Field(default=8.0, gt=0)
    user_agent: str = Field(default="bolus-ledger/0.1")


class Settings(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    # Session-start dosing parameters; defaults and bounds come from the model itself.
    dosing: DosingParameters = Field(default_factory=DosingParameters)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    openfoodfacts: OpenFoodFactsConfig = Field(default_factory=OpenFoodFactsConfig)


DEFAULT_CONFIG_PATH = Path(os.environ.get("CONFIG_PATH", "config/config.json"))

SECTIONS = ("server", "security", "dosing", "catalog", "openfoodfacts")


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON configuration at {path}") from exc


def _load_env() -> dict[str, Any]:
    env_config: dict[str, Any] = {}

    host = os.environ.get("SERVER_HOST")
    if host:
        env_config.setdefault("server", {})["host"] = host

    port = os.environ.get("SERVER_PORT")
    if port:
        env_config.setdefault("server", {})["port"] = int(port)

    cors_origins = os.environ.get("CORS_ORIGINS")
    if cors_origins:
        env_config.setdefault("security", {})["cors_origins"] = [
            origin.strip() for origin in cors_origins.split(",") if origin.strip()
        ]

    dosing_env = {
        "DEFAULT_TARGET_GLUCOSE": "target_glucose",
        "DEFAULT_ICR": "icr",
        "DEFAULT_ISF": "isf",
        "DEFAULT_INSULIN_DURATION_MIN": "insulin_duration_min",
    }
    for env_key, field_name in dosing_env.items():
        value = os.environ.get(env_key)
        if value:
            env_config.setdefault("dosing", {})[field_name] = float(value)

    seed = os.environ.get("SEED_SAMPLE_PRODUCTS")
    if seed:
        env_config.setdefault("catalog", {})["seed_sample_products"] = seed.lower() in ("1", "true", "yes")

    off_url = os.environ.get("OPENFOODFACTS_BASE_URL")
    if off_url:
        env_config.setdefault("openfoodfacts", {})["base_url"] = off_url

    off_timeout = os.environ.get("OPENFOODFACTS_TIMEOUT_SECONDS")
    if off_timeout:
        env_config.setdefault("openfoodfacts", {})["timeout_seconds"] = float(off_timeout)

    return env_config


def merge_settings(env_config: dict[str, Any], file_config: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for section in SECTIONS:
        merged[section] = {**file_config.get(section, {}), **env_config.get(section, {})}
    return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    env_config = _load_env()
    file_config = _load_file_config(DEFAULT_CONFIG_PATH)
    merged = merge_settings(env_config=env_config, file_config=file_config)
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:  # pragma: no cover
        raise RuntimeError(f"Configuration error: {exc}") from exc


__all__ = ["Settings", "get_settings"]
