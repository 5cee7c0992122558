import pytest

from domain.schemas import TaxonomyEntry
from domain.similarity.index import SimilarityIndex

SAMPLE_TAXONOMY_TEXT = """\
# Google_Product_Taxonomy_Version: 2021-09-21
1 - Animals & Pet Supplies
3237 - Animals & Pet Supplies > Live Animals
2 - Animals & Pet Supplies > Pet Supplies
2271 - Animals & Pet Supplies > Pet Supplies > Bird Supplies
222 - Electronics
262 - Electronics > Communications
1270 - Electronics > Communications > Telephony
267 - Electronics > Communications > Telephony > Mobile Phones
264 - Electronics > Communications > Telephony > Mobile Phone Accessories
2353 - Electronics > Communications > Telephony > Mobile Phone Accessories > Mobile Phone Cases
223 - Electronics > Audio
505771 - Electronics > Audio > Audio Components > Headphones & Headsets > Headphones
436 - Furniture
443 - Furniture > Chairs
"""


@pytest.fixture
def taxonomy_text() -> str:
    return SAMPLE_TAXONOMY_TEXT


@pytest.fixture
def two_entries() -> list[TaxonomyEntry]:
    return [
        TaxonomyEntry(id=1, path="Electronics > Telephony > Mobile Phones"),
        TaxonomyEntry(id=2, path="Home & Garden > Furniture > Chairs"),
    ]


@pytest.fixture
def two_entry_index(two_entries: list[TaxonomyEntry]) -> SimilarityIndex:
    index = SimilarityIndex()
    index.ingest(two_entries)
    return index
