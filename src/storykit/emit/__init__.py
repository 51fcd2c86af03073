"""
Descriptor artifact generation for the component-preview tool.
"""

from storykit.emit.emitter import StoriesEmitter
from storykit.emit.generate import build_specs, generate, generate_module

__all__ = [
    "StoriesEmitter",
    "build_specs",
    "generate",
    "generate_module",
]
