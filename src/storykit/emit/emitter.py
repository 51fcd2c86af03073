"""
Descriptor emitter: one ``<Name>.stories.js`` file per story.

The preview tool imports these files to learn each story's title, arg types
and default args. Emission is best-effort: a story whose file cannot be
written is logged and skipped, and the pass carries on with the rest. Files
are written in place, not atomically.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from storykit.core.inference import UNDEFINED_LITERAL
from storykit.core.manifest import OutputConfig, StorykitManifest, resolve_output_dir
from storykit.core.models import ComponentSpec

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
STORY_TEMPLATE = "story.stories.js.j2"
ARTIFACT_SUFFIX = ".stories.js"


def create_jinja_env() -> Environment:
    """Jinja2 environment for artifact templates (no HTML autoescaping)."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class StoriesEmitter:
    """
    Render and write descriptor artifacts.

    Attributes:
        output_dir: Directory receiving ``<Name>.stories.js`` files
        title_prefix: Sidebar group in the preview tool (``Components/Button``)
        package_import: Module path the artifact imports the runtime from
    """

    def __init__(
        self,
        output_dir: Path | None = None,
        *,
        title_prefix: str = OutputConfig.title_prefix,
        package_import: str = OutputConfig.package_import,
    ) -> None:
        self.output_dir = output_dir if output_dir is not None else resolve_output_dir()
        self.title_prefix = title_prefix
        self.package_import = package_import
        self._env = create_jinja_env()

    @classmethod
    def from_manifest(cls, manifest: StorykitManifest) -> StoriesEmitter:
        return cls(
            manifest.output_dir(),
            title_prefix=manifest.output.title_prefix,
            package_import=manifest.output.package_import,
        )

    def artifact_path(self, name: str) -> Path:
        return self.output_dir / f"{name}{ARTIFACT_SUFFIX}"

    def render(self, spec: ComponentSpec) -> str:
        """Render the artifact text for one story."""
        template = self._env.get_template(STORY_TEMPLATE)
        args = [
            {
                "name": arg.name,
                "control": arg.control.value,
                "options_type": arg.options_type,
                "required": arg.required,
                "default_value": (
                    arg.default_value if arg.default_value is not None else UNDEFINED_LITERAL
                ),
            }
            for arg in spec.args
        ]
        title = f"{self.title_prefix}/{spec.name}" if self.title_prefix else spec.name
        return template.render(
            name=spec.name,
            title=title,
            args=args,
            package_import=self.package_import,
        )

    def emit(self, spec: ComponentSpec) -> Path | None:
        """Write one artifact. Returns its path, or None if writing failed."""
        content = self.render(spec)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # The write below reports the real failure if the directory is unusable
            logger.debug("Could not create %s: %s", self.output_dir, e)

        path = self.artifact_path(spec.name)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to write story artifact %s: %s", path, e)
            return None

        logger.info("Wrote story artifact %s (%d args)", path, len(spec.args))
        return path

    def emit_all(self, specs: Iterable[ComponentSpec]) -> list[Path]:
        """Write every artifact; failures are skipped. Returns the written paths."""
        written: list[Path] = []
        for spec in specs:
            path = self.emit(spec)
            if path is not None:
                written.append(path)
        return written
