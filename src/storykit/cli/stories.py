"""
CLI commands for story generation and runtime queries.

Commands:
- generate: Write ``.stories.js`` descriptors for every story in a module
- list: Show registered stories and their arg schemas
- export: Print the preview-tool JSON for all stories
- render: Render one story with a JSON payload
- options: Show the variants registered for an enum
- lorem: Print placeholder text
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storykit.core.errors import StorykitError
from storykit.core.lorem import lorem
from storykit.core.manifest import (
    DEFAULT_MANIFEST_NAME,
    StorykitManifest,
    find_manifest,
    load_manifest,
)
from storykit.emit import StoriesEmitter, generate_module
from storykit.emit.generate import load_story_module
from storykit.runtime import StoryContext, context_from_module

console = Console()

DEFAULT_MODULE = "storykit_example.components"

ModuleOption = typer.Option(
    None, "--module", "-m", help="Python module declaring the stories (default from storykit.toml)"
)
ManifestOption = typer.Option(
    None, "--manifest", help=f"Path to {DEFAULT_MANIFEST_NAME} (default: ./{DEFAULT_MANIFEST_NAME})"
)


def _manifest(manifest_path: Path | None) -> StorykitManifest:
    if manifest_path is not None:
        return load_manifest(manifest_path)
    return find_manifest()


def _module_name(module: str | None, manifest: StorykitManifest) -> str:
    return module or manifest.module or DEFAULT_MODULE


def _load_context(module: str | None, manifest_path: Path | None) -> StoryContext:
    manifest = _manifest(manifest_path)
    try:
        loaded = load_story_module(_module_name(module, manifest))
    except ImportError as e:
        console.print(f"[red]Cannot import story module: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    return context_from_module(loaded)


def _fail(error: StorykitError) -> NoReturn:
    console.print(f"[red]{escape(str(error))}[/red]")
    raise typer.Exit(code=1)


def generate_command(
    module: str | None = ModuleOption,
    output_dir: Path | None = typer.Option(
        None, "--output", "-o", help="Output directory (overrides storykit.toml and env)"
    ),
    manifest_path: Path | None = ManifestOption,
) -> None:
    """Generate one .stories.js descriptor per story."""
    try:
        manifest = _manifest(manifest_path)
    except StorykitError as e:
        _fail(e)

    emitter = StoriesEmitter.from_manifest(manifest)
    if output_dir is not None:
        emitter.output_dir = output_dir

    module_name = _module_name(module, manifest)
    try:
        written = generate_module(module_name, emitter)
    except ImportError as e:
        console.print(f"[red]Cannot import story module: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    for path in written:
        console.print(f"[green]Generated:[/green] {path}")
    console.print(f"{len(written)} descriptor(s) written to {emitter.output_dir}")


def list_command(
    module: str | None = ModuleOption,
    manifest_path: Path | None = ManifestOption,
) -> None:
    """List registered stories with their arg schemas."""
    try:
        ctx = _load_context(module, manifest_path)
    except StorykitError as e:
        _fail(e)

    specs = ctx.list_stories()
    if not specs:
        console.print("[yellow]No stories registered[/yellow]")
        return

    for spec in specs:
        table = Table(title=spec.name)
        table.add_column("Arg")
        table.add_column("Control")
        table.add_column("Default")
        table.add_column("Required")
        table.add_column("Options")
        for arg in spec.args:
            options = ", ".join(arg.options) if arg.options else "-"
            table.add_row(
                arg.name,
                arg.control.value,
                arg.default_value or "-",
                "yes" if arg.required else "no",
                options,
            )
        console.print(table)


def export_command(
    module: str | None = ModuleOption,
    manifest_path: Path | None = ManifestOption,
) -> None:
    """Print all stories in the preview tool's JSON shape."""
    try:
        ctx = _load_context(module, manifest_path)
    except StorykitError as e:
        _fail(e)
    typer.echo(json.dumps(ctx.export_stories(), indent=2))


def render_command(
    name: str = typer.Argument(..., help="Story name"),
    args: str = typer.Option("{}", "--args", "-a", help="JSON object with story args"),
    module: str | None = ModuleOption,
    manifest_path: Path | None = ManifestOption,
) -> None:
    """Render a story and print the resulting HTML."""
    try:
        payload: Any = json.loads(args)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON for --args: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    try:
        ctx = _load_context(module, manifest_path)
        node = ctx.render_story(name, payload)
    except StorykitError as e:
        _fail(e)

    to_html = getattr(node, "to_html", None)
    typer.echo(to_html() if callable(to_html) else repr(node))


def options_command(
    type_name: str = typer.Argument(..., help="Enum type name"),
    module: str | None = ModuleOption,
    manifest_path: Path | None = ManifestOption,
) -> None:
    """Show the variants registered for an enum type."""
    try:
        ctx = _load_context(module, manifest_path)
    except StorykitError as e:
        _fail(e)

    options = ctx.get_enum_options(type_name)
    if options is None:
        console.print(f"[yellow]No options registered for {type_name}[/yellow]")
        raise typer.Exit(code=1)
    for option in options:
        typer.echo(option)


def lorem_command(
    words: int = typer.Argument(8, min=0, help="Number of words"),
) -> None:
    """Print deterministic placeholder text."""
    typer.echo(lorem(words))
