"""Errors raised by taxonomy loading, indexing and detection."""


class TaxonomyError(Exception):
    """Base class for taxonomy matcher errors."""


class IndexNotReadyError(TaxonomyError, RuntimeError):
    """Raised when detection runs before any taxonomy entries were ingested."""


class NoMatchError(TaxonomyError, LookupError):
    """Raised when a detection query yields zero candidates."""


class TaxonomyLoadError(TaxonomyError, RuntimeError):
    """Raised when raw taxonomy text cannot be read or contains nothing usable."""
