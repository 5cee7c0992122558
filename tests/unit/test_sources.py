from pathlib import Path

import httpx
import pytest

from domain.taxonomy.errors import TaxonomyLoadError
from infrastructure.config.models import (
    FileSourceConfig,
    HttpSourceConfig,
    SourceConfig,
    SourceKind,
    StaticSourceConfig,
)
from infrastructure.sources import (
    FileTaxonomySource,
    HttpTaxonomySource,
    StaticTaxonomySource,
    make_source,
)
from infrastructure.sources.registry import get_source_class, register_source

URL = "https://example.test/taxonomy-with-ids.en-US.txt"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_file_source_reads_text(tmp_path: Path) -> None:
    path = tmp_path / "taxonomy.txt"
    path.write_text("1 - Electronics\n", encoding="utf-8")

    source = FileTaxonomySource(path)
    assert source.load() == "1 - Electronics\n"
    assert source.describe() == f"file:{path}"


def test_file_source_missing_file_raises_load_failure(tmp_path: Path) -> None:
    with pytest.raises(TaxonomyLoadError, match="Failed to read"):
        FileTaxonomySource(tmp_path / "missing.txt").load()


def test_file_source_empty_file_raises_load_failure(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(TaxonomyLoadError, match="empty"):
        FileTaxonomySource(path).load()


def test_http_source_fetches_text() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content="267 - Electronics > Mobile Phones\n".encode())

    source = HttpTaxonomySource(URL, client=_client(handler))
    assert source.load() == "267 - Electronics > Mobile Phones\n"
    assert seen == [URL]


def test_http_source_error_status_raises_load_failure() -> None:
    source = HttpTaxonomySource(URL, client=_client(lambda request: httpx.Response(404)))
    with pytest.raises(TaxonomyLoadError, match="404"):
        source.load()


def test_http_source_transport_error_raises_load_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TaxonomyLoadError, match="connection refused"):
        HttpTaxonomySource(URL, client=_client(handler)).load()


def test_static_source_counts_reads() -> None:
    source = StaticTaxonomySource("1 - A\n")
    source.load()
    source.load()
    assert source.reads == 2


def test_make_source_for_each_kind(tmp_path: Path) -> None:
    file_cfg = SourceConfig(kind=SourceKind.FILE, file=FileSourceConfig(path=tmp_path / "t.txt"))
    http_cfg = SourceConfig(kind=SourceKind.HTTP, http=HttpSourceConfig(url=URL, timeout_s=5))
    static_cfg = SourceConfig(kind=SourceKind.STATIC, static=StaticSourceConfig(text="1 - A"))

    file_source = make_source(file_cfg)
    http_source = make_source(http_cfg)
    static_source = make_source(static_cfg)

    assert isinstance(file_source, FileTaxonomySource)
    assert file_source.path == tmp_path / "t.txt"
    assert isinstance(http_source, HttpTaxonomySource)
    assert http_source.timeout_s == 5
    assert isinstance(static_source, StaticTaxonomySource)


def test_register_source_rejects_duplicates() -> None:
    assert get_source_class(SourceKind.STATIC) is StaticTaxonomySource
    with pytest.raises(RuntimeError, match="already registered"):
        register_source(SourceKind.STATIC, StaticTaxonomySource)
    register_source(SourceKind.STATIC, StaticTaxonomySource, override=True)


def test_http_source_invalid_utf8_raises_load_failure() -> None:
    source = HttpTaxonomySource(URL, client=_client(lambda request: httpx.Response(200, content=b"1 - Caf\xe9\n")))
    with pytest.raises(TaxonomyLoadError, match="not valid UTF-8"):
        source.load()


def test_file_source_invalid_utf8_raises_load_failure(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1 - Caf\xe9\n")
    with pytest.raises(TaxonomyLoadError, match="Failed to read"):
        FileTaxonomySource(path).load()
