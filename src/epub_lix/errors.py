from __future__ import annotations


class EpubLixError(RuntimeError):
    """Base class for errors raised while analyzing an EPUB."""


class FormatError(EpubLixError):
    """Raised when the container or package document is structurally invalid."""


class NotFoundError(EpubLixError):
    """Raised when a declared content entry is missing or empty."""


class ParseError(EpubLixError):
    """Raised when content markup cannot be parsed strictly or leniently."""


class DivisionError(EpubLixError, ZeroDivisionError):
    """Raised when a LIX score is undefined (zero words or zero sentences)."""
