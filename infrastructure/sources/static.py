"""In-memory taxonomy source for testing and bundled taxonomies."""

from infrastructure.config.models import SourceConfig, SourceKind

from .base import TaxonomySource
from .registry import register_source


class StaticTaxonomySource(TaxonomySource):
    """Serve taxonomy text held in memory (no I/O)."""

    kind = SourceKind.STATIC

    def __init__(self, text: str) -> None:
        self.text = text
        self.reads = 0

    @classmethod
    def from_cfg(cls, cfg: SourceConfig) -> "StaticTaxonomySource":
        if cfg.static is None:
            raise ValueError("Source kind=static but cfg.static is missing")
        return cls(cfg.static.text)

    def describe(self) -> str:
        return f"static:{len(self.text)} chars"

    def read_text(self) -> str:
        self.reads += 1
        return self.text


register_source(SourceKind.STATIC, StaticTaxonomySource)
