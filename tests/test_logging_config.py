from __future__ import annotations

import logging

from gbfs_exporter.utils.logging_config import HANDLER_NAME, setup_logging


def _console_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


def test_setup_logging_sets_root_level_once() -> None:
    root = logging.getLogger()
    previous_level = root.level
    try:
        logger = setup_logging("debug")
        setup_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert logger.name == "gbfs_exporter"
        assert logger.getEffectiveLevel() == logging.DEBUG
        assert len(_console_handlers()) == 1
    finally:
        for handler in _console_handlers():
            root.removeHandler(handler)
        root.setLevel(previous_level)
