"""Checker settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Policy = Literal["fail-fast", "accumulate"]


class CheckerSettings(BaseSettings):
    """Type checker settings, read from ``TINYTC_*`` variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TINYTC_",
        case_sensitive=False,
        extra="ignore",
    )

    policy: Policy = Field(default="fail-fast")
    yield_interval: int = Field(default=1, ge=1)
    env_strategy: Literal["chain", "copy"] = Field(default="chain")
    source_id: str = Field(default="<stdin>")


def load_settings(**overrides: Any) -> CheckerSettings:
    """Load settings, letting explicit (non-None) overrides win."""
    values = {k: v for k, v in overrides.items() if v is not None}
    return CheckerSettings(**values)
