"""Configuration loading from YAML files."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from domain.similarity.index import DetectorOptions
from infrastructure.config.models import (
    CATEGORY_OPTIONS,
    AppConfig,
    DataColumnsConfig,
    DetectionConfig,
    SourceConfig,
    SourceKind,
    StatsConfig,
)
from infrastructure.constants import ENV_TAXONOMY_FILE, ENV_TAXONOMY_URL

from .registry import SOURCE_CONFIG_BY_KIND

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    # An empty file means "all defaults"
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def _section(data: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def load_source_config(
    raw: Mapping[str, Any],
    *,
    environ: Mapping[str, str] | None = None,
) -> SourceConfig:
    """
    Build the SourceConfig from the `source:` section plus environment overrides.

    Overrides:
    - TAXONOMY_FILE forces kind=file with that path
    - TAXONOMY_URL forces kind=http with that url (ignored when TAXONOMY_FILE is set)
    """
    env = os.environ if environ is None else environ

    try:
        kind = SourceKind(str(raw.get("kind", SourceKind.HTTP.value)).strip().lower())
    except ValueError as e:
        raise ValueError(
            f"Invalid source.kind {raw.get('kind')!r}; expected one of {[k.value for k in SourceKind]}"
        ) from e

    blocks: dict[str, Any] = {k.value: dict(raw.get(k.value) or {}) for k in SourceKind}

    file_override = (env.get(ENV_TAXONOMY_FILE) or "").strip()
    url_override = (env.get(ENV_TAXONOMY_URL) or "").strip()
    if file_override:
        logger.info("Taxonomy source overridden by %s=%s", ENV_TAXONOMY_FILE, file_override)
        kind = SourceKind.FILE
        blocks[kind.value]["path"] = file_override
    elif url_override:
        logger.info("Taxonomy source overridden by %s=%s", ENV_TAXONOMY_URL, url_override)
        kind = SourceKind.HTTP
        blocks[kind.value]["url"] = url_override

    # Only the selected block is validated; others are dropped
    block_model = SOURCE_CONFIG_BY_KIND.get(kind)
    if block_model is None:
        raise ValueError(f"No settings model registered for source kind: {kind.value}")

    selected = blocks[kind.value]
    if not selected and kind is not SourceKind.HTTP:
        raise ValueError(f"source.kind={kind.value} requires a '{kind.value}' block")

    return SourceConfig(kind=kind, **{kind.value: block_model(**selected)})


def load_app_config(config_path: Path, *, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load detector.yaml and construct a fully-resolved AppConfig.

    Args:
        config_path: Path to the YAML config file
        environ: Environment mapping for overrides (defaults to os.environ)

    Returns:
        Validated AppConfig

    Raises:
        FileNotFoundError: If the config file is missing
        ValueError: If sections have the wrong shape
        pydantic.ValidationError: If values fail validation
    """
    data = _load_yaml(config_path)

    source = load_source_config(_section(data, "source"), environ=environ)

    detection_raw = _section(data, "detection")
    detection = DetectionConfig(
        defaults=DetectorOptions(**_section(detection_raw, "defaults")),
        category=DetectorOptions(**{**CATEGORY_OPTIONS.model_dump(), **_section(detection_raw, "category")}),
        root_categories=list(detection_raw.get("root_categories") or []),
    )

    columns = DataColumnsConfig(**_section(data, "columns"))
    stats = StatsConfig(**_section(data, "stats"))

    cfg = AppConfig(
        source=source,
        detection=detection,
        columns=columns,
        stats=stats,
        batch_size=data.get("batch_size"),
    )
    logger.debug("Loaded config from %s (source=%s)", config_path, cfg.source.kind.value)
    return cfg
