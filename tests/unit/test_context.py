"""Tests for the story and enum registries."""

from __future__ import annotations

import logging

import pytest

from storykit import RegistrationError, StoryNotFoundError
from storykit.core.models import ControlKind
from storykit.runtime import StoryContext, create_context, enums_registrar, stories_registrar
from storykit.runtime.registration import context_from_module
from storykit_example import components
from storykit_example.components import AlertType, Button, ButtonSize, Card, Counter

ALERT_OPTIONS = ["Info", "Success", "Warning", "Error"]


class TestEnumRegistry:
    def test_unregistered_enum_has_no_options(self, ctx: StoryContext) -> None:
        assert ctx.get_enum_options("AlertType") is None

    def test_register_enum(self, ctx: StoryContext) -> None:
        spec = ctx.register_enum(AlertType)
        assert spec.type_name == "AlertType"
        assert ctx.get_enum_options("AlertType") == ALERT_OPTIONS

    def test_register_options_directly(self, ctx: StoryContext) -> None:
        ctx.register_enum_options("Tone", ["Warm", "Cool"])
        assert ctx.get_enum_options("Tone") == ["Warm", "Cool"]

    def test_returned_options_are_a_copy(self, ctx: StoryContext) -> None:
        ctx.register_enum(AlertType)
        ctx.get_enum_options("AlertType").append("Bogus")
        assert ctx.get_enum_options("AlertType") == ALERT_OPTIONS

    def test_reregistration_replaces(
        self, ctx: StoryContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        ctx.register_enum_options("AlertType", ["Old"])
        with caplog.at_level(logging.WARNING):
            ctx.register_enum(AlertType)
        assert ctx.get_enum_options("AlertType") == ALERT_OPTIONS
        assert "registered twice" in caplog.text

    def test_rejects_non_enum(self, ctx: StoryContext) -> None:
        with pytest.raises(RegistrationError):
            ctx.register_enum(Counter)


class TestStoryRegistry:
    def test_register_story(self, ctx: StoryContext) -> None:
        binding = ctx.register_story(Button)
        assert binding.name == "Button"
        assert ctx.story_names() == ["Button"]

    def test_rejects_unmarked_class(self, ctx: StoryContext) -> None:
        with pytest.raises(RegistrationError, match="Counter"):
            ctx.register_story(Counter)

    def test_registers_select_enums(self, ctx: StoryContext) -> None:
        ctx.register_story(Button)
        assert ctx.get_enum_options("ButtonSize") == ["Small", "Medium", "Large"]

    def test_reregistration_replaces(
        self, ctx: StoryContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        ctx.register_story(Button)
        with caplog.at_level(logging.WARNING):
            ctx.register_story(Button)
        assert ctx.story_names() == ["Button"]
        assert "registered twice" in caplog.text

    def test_unknown_story(self, ctx: StoryContext) -> None:
        with pytest.raises(StoryNotFoundError) as exc_info:
            ctx.render_story("Foo", {})
        assert exc_info.value.name == "Foo"
        assert str(exc_info.value) == "Story 'Foo' not found"

    def test_story_spec_resolves_options(self, example_ctx: StoryContext) -> None:
        size = example_ctx.story_spec("Button").get_arg("size")
        assert size.control is ControlKind.SELECT
        assert size.options == ["Small", "Medium", "Large"]

    def test_options_track_later_registration(self, ctx: StoryContext) -> None:
        ctx.register_story(Button)
        ctx.register_enum_options("ButtonSize", ["Tiny"])
        assert ctx.story_spec("Button").get_arg("size").options == ["Tiny"]

    def test_list_stories_in_registration_order(self, example_ctx: StoryContext) -> None:
        assert [s.name for s in example_ctx.list_stories()] == ["Button", "Card", "Input", "Alert"]


class TestExport:
    def test_export_shape(self, example_ctx: StoryContext) -> None:
        exported = {entry["name"]: entry for entry in example_ctx.export_stories()}
        assert set(exported) == {"Button", "Card", "Input", "Alert"}

        button = exported["Button"]
        assert button["argTypes"]["count"] == {
            "name": "count",
            "control": "number",
            "table": {"category": "required"},
        }
        assert button["argTypes"]["size"]["options"] == ["Small", "Medium", "Large"]
        assert button["argTypes"]["disabled"]["table"]["category"] == "optional"
        assert button["args"] == {
            "count": "0",
            "color": "'#007bff'",
            "size": "null",
            "disabled": "false",
        }

    def test_csf_export_matches(self, example_ctx: StoryContext) -> None:
        assert example_ctx.export_stories_csf() == example_ctx.export_stories()


class TestRegistrars:
    def test_entry_points(self) -> None:
        ctx = create_context(components.init_enums, components.register_all_stories)
        assert ctx.story_names() == ["Button", "Card", "Input", "Alert"]
        assert ctx.get_enum_options("AlertType") == ALERT_OPTIONS

    def test_order_does_not_matter(self) -> None:
        ctx = create_context(components.register_all_stories, components.init_enums)
        assert ctx.get_enum_options("ButtonSize") == ["Small", "Medium", "Large"]
        assert ctx.get_enum_options("AlertType") == ALERT_OPTIONS

    def test_bad_entry_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            ctx = create_context(stories_registrar(Counter, Card))
        assert ctx.story_names() == ["Card"]
        assert "Skipping story Counter" in caplog.text

    def test_bad_enum_is_skipped(self) -> None:
        ctx = create_context(enums_registrar(Counter, ButtonSize))
        assert ctx.get_enum_options("ButtonSize") == ["Small", "Medium", "Large"]

    def test_context_from_module(self) -> None:
        ctx = context_from_module(components)
        assert ctx.story_names() == ["Button", "Card", "Input", "Alert"]
