"""Pydantic models for taxonomy entries and detection results."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

PATH_SEPARATOR = " > "


def split_breadcrumb(breadcrumb: str) -> tuple[str, ...]:
    """Split a "A > B > C" breadcrumb into trimmed segments."""
    return tuple(seg.strip() for seg in breadcrumb.split(PATH_SEPARATOR))


class _CategoryPath(BaseModel):
    """Shared id + breadcrumb fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(..., gt=0, description="Taxonomy category id, unique within one snapshot.")
    path: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description='Breadcrumb segments from root to leaf, e.g. ("Electronics", "Telephony", "Mobile Phones").',
    )

    @field_validator("path", mode="before")
    @classmethod
    def _split_path(cls, value: object) -> object:
        if isinstance(value, str):
            return split_breadcrumb(value)
        return value

    @field_validator("path")
    @classmethod
    def _check_segments(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        segments = tuple(seg.strip() for seg in value)
        if any(not seg for seg in segments):
            raise ValueError("path segments must be non-empty")
        return segments

    @computed_field  # type: ignore[prop-decorator]
    @property
    def breadcrumb(self) -> str:
        return PATH_SEPARATOR.join(self.path)


class TaxonomyEntry(_CategoryPath):
    """One category from the taxonomy file. `leaf` and `depth` derive from `path`."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def leaf(self) -> str:
        return self.path[-1]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def depth(self) -> int:
        return len(self.path)


class Candidate(TaxonomyEntry):
    """Ranked detection result with its raw score and calibrated probability."""

    score: float = Field(..., description="Raw similarity score after heuristics (unbounded).")
    probability: float = Field(..., ge=0.0, le=1.0, description="Softmax probability within the returned batch.")


class CategoryMatch(_CategoryPath):
    """Single best category returned by the detector facade."""
