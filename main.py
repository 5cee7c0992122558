"""
CLI entrypoint for the product taxonomy matcher.

Two modes:
- `--title "..."` (repeatable): print the best category and ranked candidates as JSON
- `--input titles.csv`: batch mode
    - loads .env (optional) and configs/detector.yaml
    - loads the taxonomy from the configured source and builds the index
    - creates a per-run output folder under outputs/
    - ranks categories for every title and serializes predictions
    - evaluates against human category ids when available and saves metrics
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import (
    CategoryDetector,
    attach_and_serialize_predictions,
    log_evaluation_summary,
    resolve_title_and_label_columns,
    run_detection,
    run_evaluation_if_labels_available,
)
from application.constants import (
    CONFIG_SNAPSHOT_FILENAME,
    DATA_FINGERPRINT_FILENAME,
    LOG_FILENAME,
    METRICS_FILENAME,
    OUTPUT_ROOT,
    PREDICTIONS_FILENAME,
    ROOT_TABLE_FILENAME,
)
from domain.similarity.index import DetectorOptions
from domain.taxonomy.errors import NoMatchError
from infrastructure.config import AppConfig, load_app_config
from infrastructure.constants import DETECTOR_CONFIG_FILE
from infrastructure.io import ensure_exists, read_table, write_json
from infrastructure.observability import configure_logging, get_log_context, make_run_tag, set_log_context

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rank product taxonomy categories for item titles")
    p.add_argument(
        "--config",
        type=str,
        default=str(DETECTOR_CONFIG_FILE),
        help="Path to detector.yaml (default: configs/detector.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file; loaded only if it exists (default: .env)",
    )
    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument("--title", action="append", help="Item title to classify (repeatable)")
    mode.add_argument("--input", type=str, help="CSV/TSV/Excel file with a title column")
    p.add_argument("--top-k", type=_non_negative_int, default=None, help="Override detection.defaults.top_k")
    p.add_argument("--console-level", type=str, default="INFO", choices=LOG_LEVELS, help="Console log level")
    p.add_argument("--file-level", type=str, default="DEBUG", choices=LOG_LEVELS, help="File log level")
    return p.parse_args(argv)


def _classify_titles(cfg: AppConfig, detector: CategoryDetector, titles: list[str], top_k: int | None) -> None:
    options = cfg.detection.defaults
    if top_k is not None:
        options = DetectorOptions.model_validate({**options.model_dump(), "top_k": top_k})

    results = []
    for title in titles:
        try:
            best = detector.detect_category(title).model_dump(mode="json")
        except NoMatchError:
            best = None
        candidates = [c.model_dump(mode="json") for c in detector.detect(title, options)]
        results.append({"title": title, "category": best, "candidates": candidates})

    json.dump(results, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _run_batch(cfg: AppConfig, detector: CategoryDetector, input_path: Path, run_dir: Path) -> None:
    df = read_table(input_path)
    logger.info("Titles loaded from %s: %d rows, %d columns", input_path, df.shape[0], df.shape[1])

    title_col, label_col = resolve_title_and_label_columns(cfg, df)

    write_json(run_dir / CONFIG_SNAPSHOT_FILENAME, cfg.model_dump(mode="json"))
    write_json(
        run_dir / DATA_FINGERPRINT_FILENAME,
        {
            "input_file": str(input_path),
            "rows": int(df.shape[0]),
            "columns": [str(c) for c in df.columns],
            "taxonomy_source": detector.source.describe(),
            "taxonomy_size": detector.index.size,
            "log_context": get_log_context(),
        },
    )

    # Same options as detect_category, so the evaluated prediction is the facade's best category
    ranked = run_detection(detector, df, title_col, batch_size=cfg.batch_size, options=cfg.detection.category)

    df_out, predictions_path = attach_and_serialize_predictions(
        df=df,
        title_col=title_col,
        label_col=label_col,
        ranked=ranked,
        predictions_path=run_dir / PREDICTIONS_FILENAME,
    )

    metrics, root_df = run_evaluation_if_labels_available(cfg, detector, df_out, label_col)
    metrics_path = write_json(run_dir / METRICS_FILENAME, metrics)
    logger.info("Saved metrics to %s", metrics_path)

    if root_df is not None:
        root_path = run_dir / ROOT_TABLE_FILENAME
        root_df.to_csv(root_path, index=False)
        logger.info("Saved root category table to %s", root_path)

    log_evaluation_summary(
        metrics=metrics,
        root_df=root_df,
        predictions_path=predictions_path,
        metrics_path=metrics_path,
    )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "detector.yaml")
    cfg = load_app_config(config_path)

    run_dir: Path | None = None
    if args.input:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        run_id = f"{ts}_{cfg.source.kind.value}_{Path(args.input).stem}"
        run_dir = OUTPUT_ROOT / run_id
        run_dir.mkdir(parents=True, exist_ok=True)
        configure_logging(
            log_file=run_dir / LOG_FILENAME,
            console_level=getattr(logging, args.console_level),
            file_level=getattr(logging, args.file_level),
        )
        set_log_context(run_id_full=run_id, source=cfg.source.kind.value)
        logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))
        logger.info("Run output directory: %s", run_dir)
    else:
        # Keep stdout clean for the JSON result
        configure_logging(console_level=max(getattr(logging, args.console_level), logging.WARNING))

    detector = CategoryDetector.from_config(cfg)

    if run_dir is None:
        _classify_titles(cfg, detector, args.title, args.top_k)
        return

    input_path = Path(args.input)
    ensure_exists(input_path, "input titles file")
    _run_batch(cfg, detector, input_path, run_dir)
    logger.info("Detailed log: %s", run_dir / LOG_FILENAME)


if __name__ == "__main__":
    main()
