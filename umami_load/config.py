"""
Loading and validation of the load test configuration.
The schema is described with Pydantic; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator

from umami_load.catalog import Locale

DEFAULT_HOST = "https://drupal-9.0.7.ddev.site"
DEFAULT_RUN_TIME = 60.0


def _default_locale_weights() -> Dict[Locale, int]:
    return {Locale.EN: 6, Locale.ES: 2}


class LoadTestConfig(BaseModel):
    """Settings for one load test run.

    Per-page weights are fixed on the visitor classes; only the split between
    English and Spanish visitors is configurable.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(DEFAULT_HOST, validate_default=True, description="Site under test.")
    users: int = Field(1, ge=1, description="Number of concurrent virtual users.")
    spawn_rate: float = Field(1.0, gt=0, description="Users started per second.")
    run_time: float = Field(DEFAULT_RUN_TIME, gt=0, description="Run duration in seconds.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = Field("UmamiLoad/0.1", min_length=1, description="User-Agent header.")
    wait_time: Tuple[float, float] = Field((0.0, 0.0), description="Pause between tasks, [min, max] s.")
    dedupe_assets: bool = Field(False, description="Load each static asset once per page.")
    locale_weights: Dict[Locale, int] = Field(
        default_factory=_default_locale_weights,
        description="Relative number of visitors browsing in each locale; 0 disables a locale.",
    )

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("locale_weights")
    def _check_locale_weights(cls, v: Dict[Locale, int]) -> Dict[Locale, int]:
        negative = sorted(locale.value for locale, weight in v.items() if weight < 0)
        if negative:
            raise ValueError(f"negative weight for: {', '.join(negative)}")
        if not any(weight > 0 for weight in v.values()):
            raise ValueError("at least one locale needs a positive weight")
        return v

    @model_validator(mode="after")
    def _check_wait_time(self) -> LoadTestConfig:
        low, high = self.wait_time
        if low < 0 or low > high:
            raise ValueError(f"wait_time must satisfy 0 <= min <= max, got {list(self.wait_time)}")
        return self

    @property
    def host(self) -> str:
        return str(self.base_url).rstrip("/")

    def weight_for(self, locale: Locale) -> int:
        return self.locale_weights.get(locale, 0)

    def with_overrides(self, **overrides: Any) -> LoadTestConfig:
        """Return a re-validated copy with every non-None override applied."""
        update = {k: v for k, v in overrides.items() if v is not None}
        if not update:
            return self
        return LoadTestConfig.model_validate({**self.model_dump(mode="json"), **update})


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> LoadTestConfig:
    """
    Read a YAML or JSON file and return a validated LoadTestConfig.
    Raises FileNotFoundError when the file does not exist.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG_PATH))
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return LoadTestConfig(**data)
