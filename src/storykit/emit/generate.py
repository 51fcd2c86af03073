"""
Build-time generation pass.

Turns story declarations into schemas with the shared inference routine and
hands them to the emitter. Accepts story classes, ready-made
``ComponentSource`` descriptions, or a module to scan.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from storykit.core.declare import collect_source, collect_stories
from storykit.core.inference import infer_component
from storykit.core.models import ComponentSource, ComponentSpec
from storykit.emit.emitter import StoriesEmitter

logger = logging.getLogger(__name__)


def build_specs(declarations: Iterable[type | ComponentSource]) -> list[ComponentSpec]:
    """Infer a schema for each declaration, preserving order."""
    specs: list[ComponentSpec] = []
    for declaration in declarations:
        source = (
            declaration if isinstance(declaration, ComponentSource) else collect_source(declaration)
        )
        specs.append(infer_component(source))
    return specs


def load_story_module(module: str | ModuleType) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    return importlib.import_module(module)


def generate(
    declarations: Iterable[type | ComponentSource],
    emitter: StoriesEmitter,
) -> list[Path]:
    """Run inference and write one artifact per declaration."""
    specs = build_specs(declarations)
    written = emitter.emit_all(specs)
    if len(written) < len(specs):
        logger.warning(
            "Wrote %d of %d story artifacts to %s", len(written), len(specs), emitter.output_dir
        )
    return written


def generate_module(module: str | ModuleType, emitter: StoriesEmitter) -> list[Path]:
    """Scan a module for ``@story_component`` classes and generate their artifacts."""
    loaded = load_story_module(module)
    stories = collect_stories(loaded)
    logger.info("Found %d stories in %s", len(stories), loaded.__name__)
    return generate(stories, emitter)
