from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from core.config import BACKEND_DIR


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOG_FILE_NAME = "app.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

CONSOLE_HANDLER_NAME = "exam_admin.console"
FILE_HANDLER_NAME = "exam_admin.file"

# These stay at a fixed level whatever the app level is.
PINNED_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "httpx": logging.WARNING,
}
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(environment: str, override: str | None = None) -> int:
    """Explicit LOG_LEVEL wins; otherwise INFO in production and DEBUG elsewhere."""

    if override:
        level = logging.getLevelName(override.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {override!r}")
        return level
    return logging.INFO if environment == "production" else logging.DEBUG


def app_handlers(root: logging.Logger | None = None) -> list[logging.Handler]:
    root = root or logging.getLogger()
    return [h for h in root.handlers if h.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)]


def setup_logging(*, environment: str, level: str | None = None, log_dir: Path | None = None) -> None:
    """Attach the console handler, plus a rotating file handler in production.

    Only handlers this module created are looked at, so a second call is a
    no-op while handlers installed by the server or test runner are left alone.
    """

    root = logging.getLogger()
    if app_handlers(root):
        return

    env = (environment or "development").strip().lower()
    app_level = resolve_level(env, level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER_NAME)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_path = None
    if env == "production":
        directory = Path(log_dir) if log_dir is not None else BACKEND_DIR / "logs"
        directory.mkdir(parents=True, exist_ok=True)
        log_path = directory / LOG_FILE_NAME
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(app_level)
    for name, pinned in PINNED_LOGGERS.items():
        logging.getLogger(name).setLevel(pinned)
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(app_level)

    logging.getLogger(__name__).info(
        "Logging ready: environment=%s level=%s file=%s",
        env,
        logging.getLevelName(app_level),
        log_path or "-",
    )
