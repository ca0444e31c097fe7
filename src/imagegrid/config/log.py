"""Logging setup for applications embedding imagegrid."""

from __future__ import annotations

import logging

from imagegrid.config.settings import get_settings


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging from settings, optionally overriding the level."""
    cfg = get_settings()
    resolved = level if level is not None else cfg.log_level
    logging.basicConfig(level=resolved, format=cfg.log_format)
    logging.getLogger("imagegrid").setLevel(resolved)
