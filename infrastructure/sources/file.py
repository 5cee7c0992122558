"""Taxonomy source backed by a local text file."""

from pathlib import Path

from domain.taxonomy.errors import TaxonomyLoadError
from infrastructure.config.models import SourceConfig, SourceKind

from .base import TaxonomySource
from .registry import register_source


class FileTaxonomySource(TaxonomySource):
    """Read the taxonomy from disk (e.g. a bundled copy of taxonomy-with-ids.en-US.txt)."""

    kind = SourceKind.FILE

    def __init__(self, path: Path | str, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    @classmethod
    def from_cfg(cls, cfg: SourceConfig) -> "FileTaxonomySource":
        if cfg.file is None:
            raise ValueError("Source kind=file but cfg.file is missing")
        return cls(cfg.file.path, encoding=cfg.file.encoding)

    def describe(self) -> str:
        return f"file:{self.path}"

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise TaxonomyLoadError(f"Failed to read taxonomy file {self.path}: {e}") from e


register_source(SourceKind.FILE, FileTaxonomySource)
