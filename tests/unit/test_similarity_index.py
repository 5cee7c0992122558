import math
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from domain.schemas import TaxonomyEntry
from domain.similarity.index import (
    DEPTH_BOOST_CAP,
    LEAF_PHRASE_BOOST,
    SHALLOW_PENALTY,
    DetectorOptions,
    SimilarityIndex,
    apply_heuristics,
    category_tokens,
)
from domain.taxonomy.errors import IndexNotReadyError
from domain.taxonomy.loader import parse_taxonomy_text

NO_HEURISTICS = DetectorOptions(enable_heuristics=False)


def _index(*breadcrumbs: tuple[int, str]) -> SimilarityIndex:
    index = SimilarityIndex()
    index.ingest([TaxonomyEntry(id=i, path=p) for i, p in breadcrumbs])
    return index


def test_detect_before_ingest_raises_not_ready() -> None:
    index = SimilarityIndex()
    assert not index.is_ready
    with pytest.raises(IndexNotReadyError):
        index.detect("mobile phone case")


def test_detect_after_empty_ingest_raises_not_ready() -> None:
    index = SimilarityIndex()
    index.ingest([])
    with pytest.raises(IndexNotReadyError):
        index.detect("anything")


def test_mobile_phone_scenario(two_entry_index: SimilarityIndex) -> None:
    candidates = two_entry_index.detect("mobile phone case", DetectorOptions(min_depth=1, top_k=2))

    assert [c.id for c in candidates] == [1, 2]
    assert candidates[0].score > candidates[1].score
    assert candidates[0].probability > 0.5
    assert candidates[0].leaf == "Mobile Phones"
    assert candidates[0].depth == 3
    assert sum(c.probability for c in candidates) == pytest.approx(1.0, abs=1e-6)


def test_no_shared_tokens_gives_zero_scores_and_uniform_probabilities() -> None:
    index = _index((5, "Toys > Puzzles"), (2, "Furniture > Chairs"), (9, "Electronics > Audio"))
    candidates = index.detect("xyzxyz", NO_HEURISTICS)

    assert [c.id for c in candidates] == [2, 5, 9]  # ties broken by ascending id
    assert all(c.score == 0.0 for c in candidates)
    assert [c.probability for c in candidates] == pytest.approx([1 / 3] * 3)


def test_identical_scores_are_ordered_by_id() -> None:
    index = _index((7, "Toys > Puzzles"), (3, "Toys > Puzzles"))
    assert [c.id for c in index.detect("jigsaw puzzles")] == [3, 7]


def test_min_depth_excludes_shallow_entries(taxonomy_text: str) -> None:
    index = SimilarityIndex()
    index.ingest(parse_taxonomy_text(taxonomy_text))

    # "Electronics" (depth 1) matches the title verbatim but must not appear
    candidates = index.detect("Electronics", DetectorOptions(min_depth=3, top_k=50))
    assert candidates
    assert all(c.depth >= 3 for c in candidates)


def test_min_depth_above_every_entry_returns_empty(two_entry_index: SimilarityIndex) -> None:
    assert two_entry_index.detect("mobile phone", DetectorOptions(min_depth=10)) == []


def test_top_k_limits_results(taxonomy_text: str) -> None:
    index = SimilarityIndex()
    index.ingest(parse_taxonomy_text(taxonomy_text))

    candidates = index.detect("mobile phone case", DetectorOptions(top_k=3))
    assert len(candidates) == 3
    assert sum(c.probability for c in candidates) == pytest.approx(1.0, abs=1e-6)
    assert index.detect("mobile phone case", DetectorOptions(top_k=0)) == []


def test_detect_is_deterministic(taxonomy_text: str) -> None:
    index = SimilarityIndex()
    index.ingest(parse_taxonomy_text(taxonomy_text))

    first = index.detect("Bird cage for pet supplies")
    second = index.detect("Bird cage for pet supplies")
    assert first == second


def test_reingest_same_entries_is_idempotent(taxonomy_text: str) -> None:
    entries = parse_taxonomy_text(taxonomy_text)
    index = SimilarityIndex()
    index.ingest(entries)
    before = index.detect("wireless headphones")
    index.ingest(entries)
    assert index.detect("wireless headphones") == before


def test_best_match_in_sample_taxonomy(taxonomy_text: str) -> None:
    index = SimilarityIndex()
    index.ingest(parse_taxonomy_text(taxonomy_text))

    assert index.detect("Sony wireless headphones")[0].id == 505771
    assert index.detect("Mobile Phone Cases for iPhone")[0].id == 2353


def test_entry_and_query_vectors_are_unit_length(taxonomy_text: str) -> None:
    entries = parse_taxonomy_text(taxonomy_text)
    index = SimilarityIndex()
    index.ingest(entries)

    for entry in entries:
        assert index.vector_for(entry.id).norm == pytest.approx(1.0)
    assert index.query_vector("mobile phone case").norm == pytest.approx(1.0)
    assert index.query_vector("xyzxyz").norm == 0.0


def test_entry_without_tokens_has_empty_vector() -> None:
    index = _index((1, "New"), (2, "Toys > Puzzles"))

    assert index.vector_for(1).norm == 0.0
    candidates = index.detect("new puzzles", NO_HEURISTICS)
    assert all(math.isfinite(c.score) for c in candidates)
    assert {c.id: c.score for c in candidates}[1] == 0.0


def test_category_tokens_tokenize_each_segment() -> None:
    entry = TaxonomyEntry(id=1, path="Home & Garden > Furniture > Chairs")
    assert category_tokens(entry) == ["home", "garden", "furniture", "chairs"]


def test_idf_is_shared_and_positive(two_entry_index: SimilarityIndex) -> None:
    idf = two_entry_index.idf
    assert idf["mobile"] == pytest.approx(math.log(3 / 2) + 1)
    assert all(w > 0 for w in idf.values())
    with pytest.raises(TypeError):
        idf["mobile"] = 0.0  # type: ignore[index]


def test_leaf_phrase_and_depth_boost() -> None:
    index = _index((1, "Electronics > Audio > Headphones"), (2, "Electronics > Audio"))
    title = "Sony Headphones"

    raw = {c.id: c.score for c in index.detect(title, NO_HEURISTICS)}
    boosted = {c.id: c.score for c in index.detect(title)}

    assert boosted[1] == pytest.approx(raw[1] * 1.12 + LEAF_PHRASE_BOOST)
    assert boosted[2] == pytest.approx(0.0)


def test_shallow_penalty_applies_after_leaf_boost() -> None:
    index = _index((1, "Electronics > Audio > Headphones"), (2, "Electronics > Audio"))
    title = "audio gear"

    raw = {c.id: c.score for c in index.detect(title, NO_HEURISTICS)}
    boosted = {c.id: c.score for c in index.detect(title)}

    assert boosted[2] == pytest.approx((raw[2] * 1.06 + LEAF_PHRASE_BOOST) * SHALLOW_PENALTY)


def test_short_leaf_gets_no_phrase_boost() -> None:
    index = _index((1, "Arts > Kit"))
    raw = index.detect("kit", NO_HEURISTICS)[0].score
    boosted = index.detect("kit")[0].score
    assert boosted == pytest.approx(raw * 1.06 * SHALLOW_PENALTY)


def test_depth_boost_is_capped() -> None:
    deep = TaxonomyEntry(id=1, path=tuple(f"Level {i}" for i in range(8)))
    assert apply_heuristics(1.0, deep, "") == pytest.approx(DEPTH_BOOST_CAP)


def test_ingest_rejects_duplicate_ids_and_keeps_previous_index(two_entry_index: SimilarityIndex) -> None:
    dup = [TaxonomyEntry(id=5, path="A > B"), TaxonomyEntry(id=5, path="C > D")]
    with pytest.raises(ValueError, match="Duplicate"):
        two_entry_index.ingest(dup)

    assert two_entry_index.size == 2
    assert two_entry_index.get_entry(1).leaf == "Mobile Phones"


def test_reingest_replaces_previous_index(two_entry_index: SimilarityIndex) -> None:
    two_entry_index.ingest([TaxonomyEntry(id=10, path="Toys > Puzzles")])

    assert two_entry_index.size == 1
    with pytest.raises(KeyError):
        two_entry_index.get_entry(1)
    assert [c.id for c in two_entry_index.detect("mobile phone")] == [10]


def test_options_validation() -> None:
    with pytest.raises(ValidationError):
        DetectorOptions(top_k=-1)
    with pytest.raises(ValidationError):
        DetectorOptions(temperature=0)
    with pytest.raises(ValidationError):
        DetectorOptions(temperature=-0.5)
    with pytest.raises(ValidationError):
        DetectorOptions(min_depth=0)

    tiny = DetectorOptions(temperature=1e-9)
    assert tiny.effective_temperature == pytest.approx(1e-4)


def test_options_defaults() -> None:
    opts = DetectorOptions()
    assert (opts.top_k, opts.temperature, opts.enable_heuristics, opts.min_depth) == (8, 0.7, True, 1)


def test_concurrent_readers_see_whole_snapshots() -> None:
    old = [TaxonomyEntry(id=i, path=f"Toys > Puzzle {i}") for i in range(1, 40)]
    new = [TaxonomyEntry(id=100 + i, path=f"Toys > Puzzle {i}") for i in range(1, 60)]
    index = SimilarityIndex()
    index.ingest(old)

    stop = threading.Event()

    def writer() -> None:
        for n in range(30):
            index.ingest(new if n % 2 == 0 else old)
        stop.set()

    def reader() -> list[list[int]]:
        seen = []
        while not stop.is_set():
            seen.append([c.id for c in index.detect("puzzle", DetectorOptions(top_k=100))])
        return seen

    with ThreadPoolExecutor(max_workers=4) as pool:
        readers = [pool.submit(reader) for _ in range(3)]
        pool.submit(writer).result()
        results = [ids for r in readers for ids in r.result()]

    for ids in results:
        assert len(ids) in (len(old), len(new))
        assert all(i < 100 for i in ids) or all(i >= 100 for i in ids)


def test_entry_weights_follow_smoothed_idf(taxonomy_text: str) -> None:
    index = SimilarityIndex()
    index.ingest(parse_taxonomy_text(taxonomy_text))

    # 14 entries; "furniture" in 2 of them, "chairs" in 1
    furniture = math.log(15 / 3) + 1
    chairs = math.log(15 / 2) + 1
    norm = math.hypot(furniture, chairs)

    assert dict(index.vector_for(443)) == pytest.approx({"furniture": furniture / norm, "chairs": chairs / norm})
    assert index.idf["telephony"] == pytest.approx(math.log(15 / 5) + 1)
