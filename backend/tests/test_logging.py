from __future__ import annotations

import logging

import pytest

from core.logging import (
    FILE_HANDLER_NAME,
    app_handlers,
    resolve_level,
    setup_logging,
)


@pytest.fixture()
def clean_root():
    root = logging.getLogger()
    saved = app_handlers(root)
    saved_level = root.level
    for handler in saved:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        for handler in app_handlers(root):
            root.removeHandler(handler)
            handler.close()
        for handler in saved:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_resolve_level():
    assert resolve_level("production") == logging.INFO
    assert resolve_level("development") == logging.DEBUG
    assert resolve_level("production", "warning") == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("development", "chatty")


def test_production_writes_rotating_file(clean_root, tmp_path):
    setup_logging(environment="production", log_dir=tmp_path)

    handlers = {h.get_name(): h for h in app_handlers(clean_root)}
    assert len(handlers) == 2
    assert handlers[FILE_HANDLER_NAME].baseFilename == str(tmp_path / "app.log")
    assert clean_root.level == logging.INFO
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_second_call_adds_nothing(clean_root):
    setup_logging(environment="development")
    setup_logging(environment="development")

    assert len(app_handlers(clean_root)) == 1
    assert clean_root.level == logging.DEBUG
