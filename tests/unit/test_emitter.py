"""Tests for the .stories.js descriptor emitter."""

from __future__ import annotations

from pathlib import Path

import pytest

from storykit.core.manifest import OutputConfig, StorykitManifest
from storykit.core.models import ArgType, ComponentSource, ComponentSpec, ControlKind, FieldSource
from storykit.emit import StoriesEmitter, build_specs, generate, generate_module
from storykit_example import components
from storykit_example.components import Alert, Button, Card, Input


@pytest.fixture
def emitter(output_dir: Path) -> StoriesEmitter:
    return StoriesEmitter(output_dir)


@pytest.fixture
def button_spec() -> ComponentSpec:
    return build_specs([Button])[0]


class TestRender:
    def test_header_and_imports(self, emitter: StoriesEmitter, button_spec: ComponentSpec) -> None:
        content = emitter.render(button_spec)
        assert "import init, { register_all_stories, render_story, get_enum_options, " in content
        assert "from '../../example/pkg/example.js';" in content
        assert "await init();" in content
        assert content.index("init_enums();") < content.index("register_all_stories();")

    def test_title(self, emitter: StoriesEmitter, button_spec: ComponentSpec) -> None:
        assert "title: 'Components/Button'," in emitter.render(button_spec)

    def test_required_number_arg(
        self, emitter: StoriesEmitter, button_spec: ComponentSpec
    ) -> None:
        expected = (
            "    count: {\n"
            "      control: 'number',\n"
            "      description: 'count',\n"
            "      table: { category: 'required' }\n"
            "    },\n"
        )
        assert expected in emitter.render(button_spec)

    def test_select_arg_queries_options(
        self, emitter: StoriesEmitter, button_spec: ComponentSpec
    ) -> None:
        expected = (
            "    size: {\n"
            "      control: 'select',\n"
            "      description: 'size',\n"
            "      options: get_enum_options('ButtonSize'),\n"
            "      table: { category: 'required' }\n"
            "    },\n"
        )
        assert expected in emitter.render(button_spec)

    def test_optional_arg_has_no_table(
        self, emitter: StoriesEmitter, button_spec: ComponentSpec
    ) -> None:
        expected = (
            "    disabled: {\n"
            "      control: 'boolean',\n"
            "      description: 'disabled'\n"
            "    }\n"
            "  },\n"
        )
        assert expected in emitter.render(button_spec)

    def test_default_args(self, emitter: StoriesEmitter, button_spec: ComponentSpec) -> None:
        expected = (
            "Default.args = {\n"
            "  count: 0,\n"
            "  color: '#007bff',\n"
            "  size: null,\n"
            "  disabled: false\n"
            "};\n"
        )
        assert expected in emitter.render(button_spec)

    def test_template_dispatches_by_name(
        self, emitter: StoriesEmitter, button_spec: ComponentSpec
    ) -> None:
        assert "render_story('Button', args)" in emitter.render(button_spec)

    def test_lorem_defaults(self, emitter: StoriesEmitter) -> None:
        content = emitter.render(build_specs([Card])[0])
        assert "  title: 'lorem ipsum dolor',\n" in content
        assert "  content: 'lorem ipsum dolor sit amet consectetur adipiscing elit',\n" in content
        assert "  background: '#fcfcfc'\n" in content

    def test_missing_default_renders_undefined(self, emitter: StoriesEmitter) -> None:
        spec = ComponentSpec(
            name="Bare", args=[ArgType(name="x", control=ControlKind.TEXT, default_value=None)]
        )
        assert "  x: undefined\n" in emitter.render(spec)

    def test_custom_prefix_and_import(self, output_dir: Path, button_spec: ComponentSpec) -> None:
        emitter = StoriesEmitter(output_dir, title_prefix="Widgets", package_import="./pkg.js")
        content = emitter.render(button_spec)
        assert "title: 'Widgets/Button'," in content
        assert "from './pkg.js';" in content


class TestEmit:
    def test_writes_one_file_per_story(self, emitter: StoriesEmitter, output_dir: Path) -> None:
        written = generate([Button, Card, Input, Alert], emitter)
        assert [p.name for p in written] == [
            "Button.stories.js",
            "Card.stories.js",
            "Input.stories.js",
            "Alert.stories.js",
        ]
        assert all(p.parent == output_dir for p in written)
        assert "render_story('Card', args)" in (output_dir / "Card.stories.js").read_text()

    def test_creates_output_dir(self, emitter: StoriesEmitter, output_dir: Path) -> None:
        assert not output_dir.exists()
        emitter.emit(build_specs([Input])[0])
        assert output_dir.is_dir()

    def test_overwrites_existing_artifact(
        self, emitter: StoriesEmitter, output_dir: Path
    ) -> None:
        output_dir.mkdir(parents=True)
        (output_dir / "Button.stories.js").write_text("stale")
        emitter.emit(build_specs([Button])[0])
        assert "stale" not in (output_dir / "Button.stories.js").read_text()

    def test_failed_write_is_skipped(self, emitter: StoriesEmitter, output_dir: Path) -> None:
        unwritable = ComponentSpec(name="missing/Thing")
        written = emitter.emit_all([unwritable, build_specs([Alert])[0]])
        assert written == [output_dir / "Alert.stories.js"]

    def test_unusable_output_dir(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        emitter = StoriesEmitter(blocker)
        assert emitter.emit(build_specs([Alert])[0]) is None

    def test_generate_module(self, emitter: StoriesEmitter) -> None:
        written = generate_module(components, emitter)
        assert len(written) == 4

    def test_from_component_source(self, emitter: StoriesEmitter, output_dir: Path) -> None:
        source = ComponentSource(
            name="Badge",
            fields=[FieldSource(name="label", type_name="str", clauses=['lorem = "1"'])],
        )
        generate([source], emitter)
        assert "  label: 'lorem'\n" in (output_dir / "Badge.stories.js").read_text()


    def test_blank_default_uses_zero_literal(self, emitter: StoriesEmitter) -> None:
        source = ComponentSource(
            name="Caption",
            fields=[FieldSource(name="label", type_name="str", clauses=['default = ""'])],
        )
        spec = build_specs([source])[0]
        assert spec.get_arg("label").default_value == "''"
        assert "  label: ''\n" in emitter.render(spec)

    def test_empty_literal_is_not_replaced(self, emitter: StoriesEmitter) -> None:
        spec = ComponentSpec(
            name="Raw", args=[ArgType(name="x", control=ControlKind.TEXT, default_value="")]
        )
        content = emitter.render(spec)
        assert "  x: undefined" not in content
        assert "  x: \n" in content


class TestOutputDirectory:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORYKIT_OUTPUT_DIR", str(tmp_path / "from-env"))
        assert StoriesEmitter().output_dir == tmp_path / "from-env"

    def test_default_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("STORYKIT_OUTPUT_DIR", raising=False)
        assert StoriesEmitter().output_dir == Path("storybook/stories")

    def test_from_manifest(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("STORYKIT_OUTPUT_DIR", raising=False)
        manifest = StorykitManifest(
            output=OutputConfig(dir="out", title_prefix="Kit"), root=tmp_path
        )
        emitter = StoriesEmitter.from_manifest(manifest)
        assert emitter.output_dir == tmp_path / "out"
        assert emitter.title_prefix == "Kit"
