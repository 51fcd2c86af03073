"""Shared pytest fixtures for storykit tests."""

from pathlib import Path

import pytest

from storykit.runtime import StoryContext, create_context
from storykit_example.components import init_enums, register_all_stories


@pytest.fixture
def ctx() -> StoryContext:
    """Return an empty story context."""
    return StoryContext()


@pytest.fixture
def example_ctx() -> StoryContext:
    """Return a context populated with the example stories and enums."""
    return create_context(init_enums, register_all_stories)


@pytest.fixture
def output_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a scratch artifact directory with the env override cleared."""
    monkeypatch.delenv("STORYKIT_OUTPUT_DIR", raising=False)
    return tmp_path / "stories"
