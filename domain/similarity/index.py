"""TF-IDF similarity index over taxonomy entries."""

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from domain.schemas import Candidate, TaxonomyEntry
from domain.similarity.vectors import TEMPERATURE_FLOOR, TermVector, TfidfModel, fit_tfidf, softmax
from domain.taxonomy.errors import IndexNotReadyError
from domain.taxonomy.normalizer import tokenize

logger = logging.getLogger(__name__)

# Ranking heuristics
DEPTH_BOOST_STEP = 0.06
DEPTH_BOOST_CAP = 1.35
LEAF_PHRASE_BOOST = 0.15
LEAF_PHRASE_MIN_LENGTH = 3  # leaf must be longer than this
SHALLOW_DEPTH = 2
SHALLOW_PENALTY = 0.92


class DetectorOptions(BaseModel):
    """Options for a single `detect` call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    top_k: int = Field(default=8, ge=0, description="Maximum number of candidates returned.")
    temperature: float = Field(
        default=0.7,
        gt=0,
        description="Softmax temperature; lower -> peakier probabilities. Clamped to a small floor.",
    )
    enable_heuristics: bool = Field(
        default=True,
        description="Apply depth boost, exact leaf phrase boost and shallow penalty.",
    )
    min_depth: int = Field(
        default=1,
        ge=1,
        description="Entries shallower than this are excluded entirely (1 = no filter).",
    )

    @property
    def effective_temperature(self) -> float:
        return max(self.temperature, TEMPERATURE_FLOOR)


def category_tokens(entry: TaxonomyEntry) -> list[str]:
    """Tokens of every breadcrumb segment, tokenized independently and concatenated."""
    tokens: list[str] = []
    for segment in entry.path:
        tokens.extend(tokenize(segment))
    return tokens


def apply_heuristics(score: float, entry: TaxonomyEntry, title_lower: str) -> float:
    """Depth boost, then exact leaf phrase boost, then shallow penalty."""
    score *= min(1 + (entry.depth - 1) * DEPTH_BOOST_STEP, DEPTH_BOOST_CAP)

    leaf_lower = entry.leaf.lower()
    if len(leaf_lower) > LEAF_PHRASE_MIN_LENGTH and leaf_lower in title_lower:
        score += LEAF_PHRASE_BOOST

    if entry.depth <= SHALLOW_DEPTH:
        score *= SHALLOW_PENALTY
    return score


@dataclass(frozen=True)
class _Snapshot:
    entries: tuple[TaxonomyEntry, ...]
    by_id: Mapping[int, int]  # entry id -> position
    model: TfidfModel
    vectors: tuple[TermVector, ...]  # aligned to entries


class SimilarityIndex:
    """
    TF-IDF index over taxonomy entries.

    `ingest` builds a complete snapshot off to the side and swaps it in under a
    lock; `detect` reads the current snapshot once and never blocks, so
    concurrent readers see either the old index or the new one.
    """

    def __init__(self) -> None:
        self._snapshot: _Snapshot | None = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        snapshot = self._snapshot
        return snapshot is not None and bool(snapshot.entries)

    @property
    def size(self) -> int:
        snapshot = self._snapshot
        return 0 if snapshot is None else len(snapshot.entries)

    @property
    def idf(self) -> Mapping[str, float]:
        return self._require_snapshot().model.idf

    def ingest(self, entries: Sequence[TaxonomyEntry]) -> None:
        """
        Build the index from scratch, replacing any previous one.

        Raises:
            ValueError: If two entries share an id (the previous index is kept)
        """
        entries = tuple(entries)
        by_id: dict[int, int] = {}
        for pos, entry in enumerate(entries):
            if entry.id in by_id:
                raise ValueError(f"Duplicate taxonomy id in ingest: {entry.id}")
            by_id[entry.id] = pos

        docs = [category_tokens(entry) for entry in entries]
        model, vectors = fit_tfidf(docs)

        snapshot = _Snapshot(entries=entries, by_id=by_id, model=model, vectors=tuple(vectors))
        with self._lock:
            self._snapshot = snapshot

        if not entries:
            logger.warning("Ingested an empty taxonomy; detect() will fail until entries are loaded")
        else:
            logger.info("Indexed %d taxonomy entries (vocabulary=%d tokens)", len(entries), len(model.idf))

    def get_entry(self, entry_id: int) -> TaxonomyEntry:
        snapshot = self._require_snapshot()
        return snapshot.entries[snapshot.by_id[entry_id]]

    def vector_for(self, entry_id: int) -> TermVector:
        snapshot = self._require_snapshot()
        return snapshot.vectors[snapshot.by_id[entry_id]]

    def query_vector(self, title: str) -> TermVector:
        """Vectorize query text with the current IDF table (unseen tokens are dropped)."""
        return self._require_snapshot().model.vectorize(tokenize(title))

    def detect(self, title: str, options: DetectorOptions | None = None) -> list[Candidate]:
        """
        Rank categories for a title.

        Args:
            title: Free-text item title
            options: Detection options (defaults: top_k=8, temperature=0.7, heuristics on, min_depth=1)

        Returns:
            Up to top_k candidates ordered by score (desc), ties by id (asc),
            with softmax probabilities over the returned subset

        Raises:
            IndexNotReadyError: If no taxonomy entries have been ingested
        """
        opts = options or DetectorOptions()
        snapshot = self._require_snapshot()

        query = snapshot.model.vectorize(tokenize(title))
        title_lower = (title or "").lower()

        scored: list[tuple[float, int, int]] = []  # (score, id, position)
        for pos, entry in enumerate(snapshot.entries):
            if entry.depth < opts.min_depth:
                continue
            score = query.dot(snapshot.vectors[pos])
            if opts.enable_heuristics:
                score = apply_heuristics(score, entry, title_lower)
            scored.append((score, entry.id, pos))

        scored.sort(key=lambda item: (-item[0], item[1]))
        top = scored[: opts.top_k]
        probabilities = softmax([s for s, _, _ in top], opts.effective_temperature)

        logger.debug(
            "detect(%r): %d query tokens, %d eligible entries, returning %d",
            title,
            len(query),
            len(scored),
            len(top),
        )

        return [
            Candidate(
                id=snapshot.entries[pos].id,
                path=snapshot.entries[pos].path,
                score=score,
                probability=prob,
            )
            for (score, _, pos), prob in zip(top, probabilities, strict=True)
        ]

    def _require_snapshot(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is None or not snapshot.entries:
            raise IndexNotReadyError("No taxonomy loaded. Call ingest() with at least one entry first.")
        return snapshot
