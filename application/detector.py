"""Detector facade: taxonomy loading, index lifecycle and best-category queries."""

import logging
import threading
from collections.abc import Collection

from domain.schemas import Candidate, CategoryMatch, TaxonomyEntry
from domain.similarity.index import DetectorOptions, SimilarityIndex
from domain.taxonomy.errors import NoMatchError, TaxonomyLoadError
from domain.taxonomy.loader import parse_taxonomy_text
from infrastructure.config.models import CATEGORY_OPTIONS, AppConfig
from infrastructure.sources import TaxonomySource, make_source

logger = logging.getLogger(__name__)


class CategoryDetector:
    """
    Owns one SimilarityIndex and the source it is built from.

    Initialization is an explicit step: call `refresh()` (or `ensure_loaded()`)
    at startup, and again whenever the taxonomy should be re-read. Queries on a
    detector that was never loaded raise IndexNotReadyError.
    """

    def __init__(
        self,
        source: TaxonomySource,
        *,
        index: SimilarityIndex | None = None,
        root_categories: Collection[str] | None = None,
        options: DetectorOptions | None = None,
        category_options: DetectorOptions = CATEGORY_OPTIONS,
    ) -> None:
        self.source = source
        self.index = index if index is not None else SimilarityIndex()
        self.root_categories = list(root_categories) if root_categories else []
        self.options = options or DetectorOptions()
        self.category_options = category_options
        self._refresh_lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: AppConfig, *, load: bool = True) -> "CategoryDetector":
        """Build the configured source and (by default) load the taxonomy."""
        detector = cls(
            make_source(cfg.source),
            root_categories=cfg.detection.root_categories,
            options=cfg.detection.defaults,
            category_options=cfg.detection.category,
        )
        if load:
            detector.refresh()
        return detector

    @property
    def is_ready(self) -> bool:
        return self.index.is_ready

    def refresh(self) -> int:
        """
        Re-read the source and rebuild the index.

        Concurrent queries keep using the previous index until the new one is swapped in.

        Returns:
            Number of indexed entries

        Raises:
            TaxonomyLoadError: If the source fails or yields no parseable entries
        """
        with self._refresh_lock:
            return self._load_locked()

    def ensure_loaded(self) -> None:
        """Load the taxonomy once; later calls are no-ops until `refresh()`."""
        if self.index.is_ready:
            return
        with self._refresh_lock:
            if not self.index.is_ready:
                self._load_locked()

    def _load_locked(self) -> int:
        text = self.source.load()
        entries = parse_taxonomy_text(text, root_categories=self.root_categories or None)
        if not entries:
            raise TaxonomyLoadError(
                f"No taxonomy entries parsed from {self.source.describe()}"
                + (f" (root_categories={self.root_categories})" if self.root_categories else "")
            )
        self.index.ingest(entries)
        logger.info("Taxonomy ready: %d categories from %s", len(entries), self.source.describe())
        return len(entries)

    def detect(self, title: str, options: DetectorOptions | None = None) -> list[Candidate]:
        """Ranked candidates for a title (see SimilarityIndex.detect)."""
        return self.index.detect(title, options or self.options)

    def detect_category(self, item_title: str) -> CategoryMatch:
        """
        Best single category for an item title.

        Raises:
            IndexNotReadyError: If the taxonomy was never loaded
            NoMatchError: If no category survives the depth filter
        """
        candidates = self.index.detect(item_title, self.category_options)
        if not candidates:
            raise NoMatchError(f"No category matched {item_title!r}")
        best = candidates[0]
        logger.debug("Best category for %r: %d %s (p=%.3f)", item_title, best.id, best.breadcrumb, best.probability)
        return CategoryMatch(id=best.id, path=best.path)

    def get_category(self, category_id: int) -> TaxonomyEntry:
        """Look up a loaded category by id (KeyError if unknown)."""
        return self.index.get_entry(category_id)
