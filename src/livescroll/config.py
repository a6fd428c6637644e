"""
Settings for Live Scroll Transcript.
Loaded from an optional YAML file, then overridden by LIVESCROLL_* env vars.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .schemas.captions import ScreenRect
from .utils.constants import DEFAULT_CDP_URL, DEFAULT_SCROLL_THRESHOLD

ENV_PREFIX = "LIVESCROLL_"


class Settings(BaseModel):
    scroll_threshold: int = Field(default=DEFAULT_SCROLL_THRESHOLD, ge=1,
                                  description="Caption view scrolls per caption round")
    caption_region: Optional[ScreenRect] = None
    poll_interval: float = Field(default=0.5, gt=0, description="Seconds between region polls")
    cdp_url: str = DEFAULT_CDP_URL
    tesseract_config: str = ""
    log_level: str = "INFO"

    @field_validator("caption_region", mode="before")
    @classmethod
    def _parse_region(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ScreenRect.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def _env_overrides() -> Dict[str, str]:
    overrides = {}
    for name in Settings.model_fields:
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None, **overrides: Any) -> Settings:
    """
    Build Settings from `path` (YAML), env vars, then explicit overrides.
    Explicit overrides that are None are ignored.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found at {path}")
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded)
    data.update(_env_overrides())
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
