"""Factory for creating taxonomy sources."""

import importlib
import logging

from infrastructure.config.models import SourceConfig, SourceKind

from .base import TaxonomySource
from .registry import get_source_class

logger = logging.getLogger(__name__)


def _ensure_source_imported(kind: SourceKind) -> None:
    """
    Lazy-import the source module to trigger `register_source(...)`.

    Convention:
      - SourceKind value MUST match the module filename under infrastructure/sources/
        e.g., SourceKind.HTTP.value == "http" -> infrastructure/sources/http.py
    """
    module_name = f"{__package__}.{kind.value}"
    try:
        importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if getattr(e, "name", None) == module_name:
            raise RuntimeError(
                f"No source module found for kind='{kind.value}'. "
                f"Expected file: infrastructure/sources/{kind.value}.py"
            ) from e
        raise


def make_source(cfg: SourceConfig) -> TaxonomySource:
    """
    Factory function to create the taxonomy source selected by cfg.kind.

    Raises:
        RuntimeError: If the source kind has no registered implementation.
    """
    source_cls = get_source_class(cfg.kind)

    if source_cls is None:
        _ensure_source_imported(cfg.kind)
        source_cls = get_source_class(cfg.kind)

    if source_cls is None:
        raise RuntimeError(
            f"Source '{cfg.kind.value}' did not register a class. "
            f"Make sure {cfg.kind.value}.py calls register_source(...)."
        )

    source = source_cls.from_cfg(cfg)
    logger.debug("Created taxonomy source: %s", source.describe())
    return source
