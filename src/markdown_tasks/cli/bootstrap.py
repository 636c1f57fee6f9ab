# src/markdown_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it loads settings once and wires the
concrete completion client and config store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..llm.client import OpenRouterCompletionClient
from ..store.config_store import ConfigStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). Nothing here touches the
    network or requires an API key.
    """
    if settings is None:
        settings = get_settings()

    state = AppState(
        settings=settings,
        llm=OpenRouterCompletionClient(settings),
        config_store=ConfigStore(settings.config_file),
    )
    logger.debug("State ready (config=%s, model=%s)", settings.config_file, settings.llm_model)
    return state
