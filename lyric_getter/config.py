from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .models import ConfigError

DEFAULT_ARTIST_FILTER = "udio"
DEFAULT_EXTENSION = "mp3"
DEFAULT_OUTPUT_NAME = "lyrics.txt"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class RunConfig(BaseModel):
    """Fully resolved parameters for a single run."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    root: Path = Field(default=None, validate_default=True)
    output: Path = Field(default=None, validate_default=True)
    dry_run: bool = False
    artist_filter: str = DEFAULT_ARTIST_FILTER
    extensions: FrozenSet[str] = Field(default_factory=lambda: frozenset({DEFAULT_EXTENSION}))
    output_format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        validation_alias=AliasChoices("output_format", "format"),
    )
    max_depth: Optional[int] = Field(default=None, ge=0)
    follow_symlinks: bool = False
    summary_json: Optional[Path] = None
    quiet: bool = False
    flush_every: int = Field(default=50, ge=1)

    @field_validator("root", mode="before")
    @classmethod
    def _expand_root(cls, value: Optional[str | Path]) -> Path:
        if value is None:
            return Path.cwd()
        return Path(value).expanduser().resolve()

    @field_validator("root")
    @classmethod
    def _require_directory(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"The provided root path '{value}' is not an existing directory.")
        return value

    @field_validator("output", mode="before")
    @classmethod
    def _resolve_output(cls, value: Optional[str | Path], info: ValidationInfo) -> Path:
        return _under_root(info.data.get("root"), value or DEFAULT_OUTPUT_NAME)

    @field_validator("summary_json", mode="before")
    @classmethod
    def _resolve_summary(cls, value: Optional[str | Path], info: ValidationInfo) -> Optional[Path]:
        if value is None:
            return None
        return _under_root(info.data.get("root"), value)

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any) -> FrozenSet[str]:
        if value is None:
            items: list[Any] = []
        elif isinstance(value, str):
            items = value.split(",")
        else:
            items = list(value)
        normalized = {str(item).strip().lstrip(".").lower() for item in items}
        normalized.discard("")
        return frozenset(normalized or {DEFAULT_EXTENSION})

    @field_validator("output_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_sources(
        cls,
        overrides: Mapping[str, Any],
        config_path: Optional[Path] = None,
    ) -> "RunConfig":
        """Merge an optional YAML file with explicit overrides; overrides win."""
        values: Dict[str, Any] = {}
        if config_path is not None:
            values.update(load_config_file(config_path))
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    return {str(key).replace("-", "_"): value for key, value in raw.items()}


def _under_root(root: Optional[Path], value: str | Path) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute() or root is None:
        return path
    return root / path
