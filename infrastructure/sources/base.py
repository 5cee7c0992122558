"""Base interface for taxonomy text sources."""

import logging
from abc import ABC, abstractmethod

from domain.taxonomy.errors import TaxonomyLoadError
from infrastructure.config.models import SourceConfig, SourceKind

logger = logging.getLogger(__name__)


class TaxonomySource(ABC):
    """
    Abstract base class for taxonomy sources.
    Common interface for wherever the raw "<id> - <breadcrumb>" text lives.

    All concrete sources must implement:
    - read_text(): Return the raw taxonomy text (raise TaxonomyLoadError on failure)
    - from_cfg(): Build the source from a SourceConfig
    """

    kind: SourceKind

    @classmethod
    @abstractmethod
    def from_cfg(cls, cfg: SourceConfig) -> "TaxonomySource":
        raise NotImplementedError

    @abstractmethod
    def read_text(self) -> str:
        """Return the raw taxonomy text."""
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable location for logs and errors."""
        return self.kind.value

    def load(self) -> str:
        """
        Read the taxonomy text and reject an empty resource.

        Raises:
            TaxonomyLoadError: If the source cannot be read or is empty
        """
        text = self.read_text()
        if not text or not text.strip():
            raise TaxonomyLoadError(f"Taxonomy source {self.describe()} is empty")
        logger.info("Loaded taxonomy text from %s (%d chars)", self.describe(), len(text))
        return text
