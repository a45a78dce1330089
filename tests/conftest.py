from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.workspace import WorkspaceBuilder


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a reusable workspace rooted at the pytest tmp_path."""
    return WorkspaceBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_usermeta_logger():
    """Undo CLI logging configuration so caplog keeps seeing package records."""
    logger = logging.getLogger("usermeta")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
