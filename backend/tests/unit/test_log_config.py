"""Unit tests for per-category log levels."""

import logging

from inkwell.config import Settings
from inkwell.infrastructure.logging.log_config import _apply_category_levels, _parse_level


def test_category_levels_follow_settings():
    settings = Settings(_env_file=None, log_level_lifecycle="DEBUG", log_level_sql="ERROR")

    _apply_category_levels(settings)

    assert logging.getLogger("ArticleLifecycle").level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("aiosqlite").level == logging.ERROR


def test_unknown_level_names_fall_back_to_info():
    assert _parse_level("warning") == logging.WARNING
    assert _parse_level("LOUD") == logging.INFO
