"""Shared pytest fixtures for mdescape tests."""

import pytest

from mdescape.config import EscapeConfig
from mdescape.tree import Node, transform


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MDESCAPE_* variables from the host out of the tests."""
    for name in ("TEXT_TYPES", "PASSTHROUGH_TYPES", "MAX_VALUE_LENGTH", "LOG_LEVEL"):
        monkeypatch.delenv(f"MDESCAPE_{name}", raising=False)


@pytest.fixture
def config() -> EscapeConfig:
    """Default escaping configuration."""
    return EscapeConfig()


@pytest.fixture
def process():
    """Escape text the way the transform does for a root's only child.

    Returns:
        Callable taking the raw text and returning the escaped value
    """

    def _process(text: str) -> str:
        root = Node(type="root", children=[Node(type="text", value=text)])
        return transform(root).children[0].value

    return _process
