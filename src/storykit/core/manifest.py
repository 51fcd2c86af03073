"""
Project configuration loaded from ``storykit.toml``.

Example::

    [project]
    module = "storykit_example.components"

    [output]
    dir = "storybook/stories"
    title_prefix = "Components"
    package_import = "../../example/pkg/example.js"

``STORYKIT_OUTPUT_DIR`` overrides ``output.dir`` when set.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from storykit.core.errors import ManifestError

logger = logging.getLogger(__name__)

OUTPUT_DIR_ENV_VAR = "STORYKIT_OUTPUT_DIR"
DEFAULT_OUTPUT_DIR = "storybook/stories"
DEFAULT_MANIFEST_NAME = "storykit.toml"


@dataclass
class OutputConfig:
    """Where and how descriptor artifacts are written."""

    dir: str = DEFAULT_OUTPUT_DIR
    title_prefix: str = "Components"
    package_import: str = "../../example/pkg/example.js"


@dataclass
class StorykitManifest:
    """Parsed ``storykit.toml``."""

    module: str | None = None
    output: OutputConfig = field(default_factory=OutputConfig)
    root: Path = field(default_factory=Path.cwd)

    def output_dir(self) -> Path:
        """Resolve the artifact directory, honouring ``STORYKIT_OUTPUT_DIR``."""
        return resolve_output_dir(self.output.dir, self.root)


def resolve_output_dir(configured: str | None = None, root: Path | None = None) -> Path:
    """Resolution order: environment variable, configured value, default."""
    env_value = os.environ.get(OUTPUT_DIR_ENV_VAR, "").strip()
    raw = env_value or configured or DEFAULT_OUTPUT_DIR
    path = Path(raw)
    if not path.is_absolute() and root is not None:
        path = root / path
    return path


def load_manifest(path: Path) -> StorykitManifest:
    """Load ``storykit.toml``.

    Raises:
        ManifestError: If the file cannot be read or is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    output_data = data.get("output", {})

    module = project.get("module")
    if module is not None and not isinstance(module, str):
        raise ManifestError(f"project.module must be a string, got {module!r}")

    defaults = OutputConfig()
    output = OutputConfig(
        dir=str(output_data.get("dir", defaults.dir)),
        title_prefix=str(output_data.get("title_prefix", defaults.title_prefix)),
        package_import=str(output_data.get("package_import", defaults.package_import)),
    )

    logger.debug("Loaded manifest %s (module=%s, output=%s)", path, module, output.dir)
    return StorykitManifest(module=module, output=output, root=path.resolve().parent)


def find_manifest(start: Path | None = None) -> StorykitManifest:
    """Load ``storykit.toml`` from ``start`` (or cwd) if present, else defaults."""
    base = start or Path.cwd()
    candidate = base / DEFAULT_MANIFEST_NAME
    if candidate.is_file():
        return load_manifest(candidate)
    return StorykitManifest(root=base)
