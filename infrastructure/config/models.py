"""Configuration models (Pydantic classes)."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.similarity.index import DetectorOptions
from infrastructure.constants import DEFAULT_TAXONOMY_URL


class SourceKind(str, Enum):
    """Supported taxonomy sources."""

    FILE = "file"
    HTTP = "http"
    STATIC = "static"


class FileSourceConfig(BaseModel):
    """Read the taxonomy from a local text file."""

    path: Path
    encoding: str = "utf-8"


class HttpSourceConfig(BaseModel):
    """Fetch the taxonomy over HTTP(S)."""

    url: str = DEFAULT_TAXONOMY_URL
    timeout_s: float = Field(default=30.0, gt=0, description="Request timeout in seconds.")

    @field_validator("url")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"http source url must start with http:// or https://, got {value!r}")
        return value


class StaticSourceConfig(BaseModel):
    """Taxonomy text embedded directly in the config (tests, tiny taxonomies)."""

    text: str


class SourceConfig(BaseModel):
    """
    Taxonomy source selection.

    Convention: the block holding the source settings is named after `kind`
    (kind=http -> `http:` block).
    """

    kind: SourceKind = SourceKind.HTTP
    file: FileSourceConfig | None = None
    http: HttpSourceConfig | None = None
    static: StaticSourceConfig | None = None

    @model_validator(mode="after")
    def _validate(self) -> "SourceConfig":
        if self.kind is SourceKind.HTTP and self.http is None:
            # The official taxonomy URL is a sensible default
            self.http = HttpSourceConfig()
        if getattr(self, self.kind.value) is None:
            raise ValueError(f"source.kind={self.kind.value} requires a '{self.kind.value}' block")
        return self


# Single best-category queries look at fewer, more specific candidates
CATEGORY_OPTIONS = DetectorOptions(top_k=6, min_depth=2)


class DetectionConfig(BaseModel):
    """Detection options for ranked queries and for the single best-category query."""

    defaults: DetectorOptions = Field(
        default_factory=DetectorOptions,
        description="Options used by ranked detect() calls.",
    )
    category: DetectorOptions = Field(
        default=CATEGORY_OPTIONS,
        description="Options used by detect_category() (single best match).",
    )
    root_categories: list[str] = Field(
        default_factory=list,
        description="Restrict the taxonomy to these top-level categories (empty = keep all).",
    )

    @field_validator("root_categories")
    @classmethod
    def _strip_roots(cls, value: list[str]) -> list[str]:
        return [str(v).strip() for v in value if str(v).strip()]


class DataColumnsConfig(BaseModel):
    """Column name mapping for batch title files."""

    title_col: str = "title"
    label_col: str | None = None  # human category id (optional)


class StatsConfig(BaseModel):
    """Configuration for evaluation statistics."""

    seed: int = 42
    n_boot: int = Field(default=2000, ge=0)
    alpha: float = Field(default=0.05, gt=0, lt=1)
    top_k_hits: list[int] = Field(default_factory=lambda: [1, 3, 5])

    @field_validator("top_k_hits")
    @classmethod
    def _positive_ks(cls, value: list[int]) -> list[int]:
        if any(k <= 0 for k in value):
            raise ValueError("top_k_hits values must be positive")
        return sorted(set(value))


class AppConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from detector.yaml
    - Environment overrides applied by the configuration loader
    - Consumed by the detector facade and the batch runner
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    columns: DataColumnsConfig = Field(default_factory=DataColumnsConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    batch_size: int | None = Field(default=None, description="Titles per logged batch (None = one batch).")

    @model_validator(mode="after")
    def _validate(self) -> "AppConfig":
        if self.batch_size is not None and self.batch_size <= 0:
            raise ValueError("batch_size must be a positive integer or null")
        if self.columns.label_col is not None and not str(self.columns.label_col).strip():
            self.columns.label_col = None
        return self
