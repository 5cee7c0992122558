"""
Logging setup with contextvars-based metadata injection.

- Adds run_tag and batch_id into every log line (via contextvars).
- Supports console-only logging OR console + rotating file logs.
- Quiets HTTP client loggers used by the taxonomy fetch.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

cv_run_tag = contextvars.ContextVar("run_tag", default="-")
cv_batch_id = contextvars.ContextVar("batch_id", default="-")

# Kept in context for metadata, not printed on every line
cv_run_id_full = contextvars.ContextVar("run_id_full", default="-")
cv_source = contextvars.ContextVar("source", default="-")


def make_run_tag(run_id_full: str, length: int = 8) -> str:
    """Short stable tag for a run id (BLAKE2s hex prefix)."""
    h = hashlib.blake2s(run_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Copy the run/batch context variables onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run = cv_run_tag.get() or "-"
        record.batch = cv_batch_id.get() or "-"
        return True


def set_log_context(
    *,
    run_id_full: str | None = None,
    batch_id: int | None = None,
    source: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if run_id_full is not None:
        cv_run_id_full.set(str(run_id_full))
        cv_run_tag.set(make_run_tag(str(run_id_full)))
    if batch_id is not None:
        cv_batch_id.set(f"{int(batch_id):03d}")
    if source is not None:
        cv_source.set(str(source))


def get_log_context() -> dict[str, str]:
    """Return the current context, e.g. to embed in output artifacts."""
    return {
        "run_tag": str(cv_run_tag.get() or "-"),
        "run_id_full": str(cv_run_id_full.get() or "-"),
        "batch_id": str(cv_batch_id.get() or "-"),
        "source": str(cv_source.get() or "-"),
    }


def clear_batch_context() -> None:
    """Reset batch context to default (keep run info)."""
    cv_batch_id.set("-")


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application logging with contextvars support.

    Args:
        log_file: Optional path to a rotating log file
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # handlers enforce levels

    console_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] r=%(run)s b=%(batch)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    file_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s | r=%(run)s b=%(batch)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx_filter = ContextInjectFilter()

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(console_formatter)
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(file_formatter)
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    # Taxonomy fetch goes through httpx
    for name in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
