"""
epub_lix package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import LixConfig, config_from_dict, config_from_yaml, load_config
from .errors import DivisionError, EpubLixError, FormatError, NotFoundError, ParseError
from .models import Analysis
from .pipeline import analyze_epub

__all__ = [
    "Analysis",
    "DivisionError",
    "EpubLixError",
    "FormatError",
    "LixConfig",
    "NotFoundError",
    "ParseError",
    "analyze_epub",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
]

__version__ = "0.1.0"
