from __future__ import annotations

"""Configuration loading utilities for the filterz package."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator
import os
import textwrap

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - Python <3.11 fallback
    import tomli as tomllib  # type: ignore

__all__ = ["Config", "load_config", "write_default_config", "DEFAULT_CONFIG_TOML"]

DEFAULT_CONFIG_TOML = textwrap.dedent(
    """
    [codec]
    legacy_string_tokens = true
    strict = false

    [logging]
    level = "WARNING"
    file = ""

    [output]
    format = "json"
    """
)

OUTPUT_FORMATS = ("json", "table")


@dataclass(slots=True)
class Config:
    """Runtime configuration for the filterz command."""

    legacy_string_tokens: bool = True
    strict: bool = False
    log_level: str = "WARNING"
    log_file: str | None = None
    output_format: str = "json"

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        self.log_file = self.log_file or None
        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {self.output_format}")


def load_config(config_path: str | Path | None = None) -> Config:
    """Load the first configuration found, falling back to the packaged one.

    Resolution order:
        1. explicit ``config_path`` argument
        2. ``FILTERZ_CONFIG`` environment variable
        3. ``~/.config/filterz/config.toml``
        4. packaged default configuration
    """
    source = next((path for path in _candidate_paths(config_path) if path.is_file()), None)
    content = source.read_text(encoding="utf-8") if source else DEFAULT_CONFIG_TOML
    return _config_from_toml(content)


def _candidate_paths(config_path: str | Path | None) -> Iterator[Path]:
    if config_path:
        yield Path(config_path).expanduser()
    env_path = os.environ.get("FILTERZ_CONFIG")
    if env_path:
        yield Path(env_path).expanduser()
    yield Path.home() / ".config" / "filterz" / "config.toml"


def _config_from_toml(content: str) -> Config:
    data = tomllib.loads(content)
    codec = data.get("codec", {})
    logging_section = data.get("logging", {})
    output = data.get("output", {})

    return Config(
        legacy_string_tokens=bool(codec.get("legacy_string_tokens", True)),
        strict=bool(codec.get("strict", False)),
        log_level=str(logging_section.get("level", "WARNING")),
        log_file=str(logging_section.get("file") or ""),
        output_format=str(output.get("format", "json")),
    )


def write_default_config(target_path: str | Path) -> Path:
    """Write the packaged defaults to ``target_path`` and return its absolute path."""
    target = Path(target_path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    return target.resolve()
