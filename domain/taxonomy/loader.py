"""Parse the flat "<id> - <breadcrumb>" taxonomy text format."""

import logging
import re
from collections.abc import Collection, Iterable

from pydantic import ValidationError

from domain.schemas import TaxonomyEntry, split_breadcrumb

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"^(\d+)\s*-\s*(.+)$")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def parse_taxonomy_text(
    raw_text: str,
    *,
    root_categories: Collection[str] | None = None,
) -> list[TaxonomyEntry]:
    """
    Parse raw taxonomy text into entries.

    The file has lines like: "2271 - Animals & Pet Supplies > Pet Supplies > Bird Supplies".
    Empty lines, "#" comments and lines that do not match the format are skipped.
    This is a pure function - fetching the text is the caller's job.

    Duplicate ids: the later line wins, keeping the position of the first occurrence.

    Args:
        raw_text: Whole taxonomy file contents
        root_categories: If given, keep only entries whose first segment is listed

    Returns:
        Entries in file order
    """
    roots = set(root_categories) if root_categories else None
    by_id: dict[int, TaxonomyEntry] = {}
    skipped = 0

    for line in _LINE_SPLIT_RE.split(raw_text or ""):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        match = _LINE_RE.match(trimmed)
        if match is None:
            skipped += 1
            continue

        segments = split_breadcrumb(match.group(2).strip())
        if roots is not None and segments[0] not in roots:
            continue

        try:
            entry = TaxonomyEntry(id=int(match.group(1)), path=segments)
        except ValidationError:
            logger.debug("Skipping invalid taxonomy line: %r", trimmed)
            skipped += 1
            continue

        if entry.id in by_id:
            logger.warning(
                "Duplicate taxonomy id %d: %r replaces %r",
                entry.id,
                entry.breadcrumb,
                by_id[entry.id].breadcrumb,
            )
        by_id[entry.id] = entry

    if skipped:
        logger.debug("Skipped %d malformed taxonomy line(s)", skipped)
    return list(by_id.values())


def index_entries_by_id(entries: Iterable[TaxonomyEntry]) -> dict[int, TaxonomyEntry]:
    """Map entry id -> entry (later entries win)."""
    return {entry.id: entry for entry in entries}
