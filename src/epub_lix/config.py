from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

DEFAULT_ABBREVIATIONS: Dict[str, str] = {
    "f.eks.": "for eksempel",
    "fx": "for eksempel",
    "bl.a.": "blandt andet",
    "Bl.a.": "Blandt andet",
    "m.fl.": "med flere",
    "o.a.": "og andre",
    "s.": "side",
    "o.s.v.": "og så videre",
    "m.m.": "med mere",
    "vol.": "volumen",
}

READING_ORDERS = ("manifest", "spine")


@dataclass(slots=True)
class LixConfig:
    """Configuration options for the EPUB LIX analysis pipeline."""

    max_std_dev: float = 6.0
    long_word_length: int = 6
    workers: int = 4
    reading_order: str = "manifest"
    colophon_pattern: str = "colophon|kolofon"
    chapter_pattern: str = "chapter|kapitel"
    chapters_only: bool = False
    abbreviations: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_ABBREVIATIONS)
    )

    def __post_init__(self) -> None:
        if self.reading_order not in READING_ORDERS:
            raise ValueError(
                f"reading_order must be one of {READING_ORDERS}, got {self.reading_order!r}."
            )

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(LixConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "abbreviations" in kwargs:
        abbreviations = kwargs["abbreviations"]
        if not isinstance(abbreviations, Mapping):
            raise ValueError("abbreviations must be a mapping of abbreviation to expansion.")
        kwargs["abbreviations"] = {str(k): str(v) for k, v in abbreviations.items()}
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> LixConfig:
    """Build a LixConfig from a dictionary-like input."""
    if data is None:
        return LixConfig()
    return LixConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> LixConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> LixConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return LixConfig()
    return config_from_yaml(path)
