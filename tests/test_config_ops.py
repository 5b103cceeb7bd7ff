"""Tests for ApplyConfigUseCase and the ``config`` command."""

from __future__ import annotations

import pytest

from inkwell.ui.application.config_ops import ApplyConfigUseCase
from inkwell.ui.application.context import RendererContext
from inkwell.ui.application.renderer import Renderer
from inkwell.ui.events import EventBus, SettingsChanged
from inkwell.ui.presentation.collaborators import Collaborators

from tests.helpers import collect


@pytest.fixture
def use_case(context: RendererContext) -> ApplyConfigUseCase:
    return ApplyConfigUseCase(context)


class TestThemeKey:
    """Tests for the one-time ``darkTheme`` toggle."""

    def test_dark_theme_toggles_every_themed_collaborator_once(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators
    ) -> None:
        assert use_case.execute("darkTheme", True)
        assert use_case.execute("darkTheme", True)

        for collaborator in ui.themed():
            collaborator.toggle_theme.assert_called_once_with()
        assert context.settings.dark_theme is True
        assert use_case.is_initialized("darkTheme")

    def test_light_theme_leaves_ui_alone(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators
    ) -> None:
        use_case.execute("darkTheme", False)
        for collaborator in ui.themed():
            collaborator.toggle_theme.assert_not_called()
        assert context.settings.dark_theme is False

    def test_later_values_are_ignored(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators
    ) -> None:
        use_case.execute("darkTheme", False)
        use_case.execute("darkTheme", True)
        ui.editor.toggle_theme.assert_not_called()
        assert context.settings.dark_theme is False


class TestSnippetsKey:
    """Tests for the one-time ``snippets`` toggle."""

    def test_hiding_snippets_toggles_preview_once(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators
    ) -> None:
        use_case.execute("snippets", False)
        use_case.execute("snippets", False)
        ui.preview.toggle_snippets.assert_called_once_with()
        assert context.settings.snippets is False

    def test_showing_snippets_is_the_default(
        self, use_case: ApplyConfigUseCase, ui: Collaborators
    ) -> None:
        use_case.execute("snippets", True)
        ui.preview.toggle_snippets.assert_not_called()


class TestPlainKeys:
    """Tests for keys that only store a value."""

    def test_locale(self, use_case: ApplyConfigUseCase, context: RendererContext) -> None:
        use_case.execute("app_lang", "de_DE")
        assert context.settings.locale == "de_DE"

    @pytest.mark.parametrize("key, field_name", [("pandoc", "pandoc_available"), ("pdflatex", "pdflatex_available")])
    def test_tool_flags_are_reapplied(
        self, use_case: ApplyConfigUseCase, context: RendererContext, key: str, field_name: str
    ) -> None:
        use_case.execute(key, True)
        assert getattr(context.settings, field_name) is True
        use_case.execute(key, False)
        assert getattr(context.settings, field_name) is False

    @pytest.mark.parametrize(
        "key, value",
        [("pandoc", "false"), ("pdflatex", 1), ("darkTheme", "false"), ("snippets", None), ("app_lang", 7)],
    )
    def test_wrongly_typed_values_are_rejected(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators, key: str, value: object
    ) -> None:
        before = context.settings.as_dict()

        assert use_case.execute(key, value)

        assert context.settings.as_dict() == before
        assert not use_case.is_initialized(key)
        ui.editor.toggle_theme.assert_not_called()
        ui.preview.toggle_snippets.assert_not_called()

    def test_rejected_value_leaves_toggle_available(
        self, use_case: ApplyConfigUseCase, context: RendererContext, ui: Collaborators
    ) -> None:
        use_case.execute("darkTheme", "true")
        use_case.execute("darkTheme", True)
        ui.editor.toggle_theme.assert_called_once_with()
        assert context.settings.dark_theme is True

    def test_unknown_key_is_ignored(self, use_case: ApplyConfigUseCase, context: RendererContext) -> None:
        before = context.settings.as_dict()
        assert not use_case.execute("fontSize", 14)
        assert context.settings.as_dict() == before


class TestSettingsChangedEvent:
    """Tests for SettingsChanged publication."""

    def test_published_with_changed_values(
        self, use_case: ApplyConfigUseCase, event_bus: EventBus
    ) -> None:
        received = collect(event_bus, SettingsChanged)
        use_case.execute("app_lang", "fr_FR")
        use_case.execute("app_lang", "fr_FR")
        assert received == [SettingsChanged(settings={"locale": "fr_FR"})]

    def test_not_published_when_nothing_changes(
        self, use_case: ApplyConfigUseCase, event_bus: EventBus
    ) -> None:
        received = collect(event_bus, SettingsChanged)
        use_case.execute("darkTheme", False)
        assert received == []


def test_config_command_goes_through_router(renderer: Renderer, ui: Collaborators) -> None:
    renderer.handle_message("config", {"key": "darkTheme", "value": True})
    renderer.handle_message("config", {"key": "darkTheme", "value": True})
    renderer.handle_message("config", {"key": "app_lang", "value": "nl_NL"})

    ui.toolbar.toggle_theme.assert_called_once_with()
    assert renderer.context.settings.dark_theme is True
    assert renderer.get_locale() == "nl_NL"
    assert renderer.router.config.is_initialized("app_lang")


def test_toggle_after_config_does_not_count_as_first_application(renderer: Renderer, ui: Collaborators) -> None:
    renderer.handle_message("toggle-theme", "no-emit")
    renderer.handle_message("config", {"key": "darkTheme", "value": True})
    ui.editor.toggle_theme.assert_called_once_with()
    assert renderer.context.settings.dark_theme is True


def test_light_config_after_manual_toggle_keeps_settings_dark(renderer: Renderer, ui: Collaborators) -> None:
    renderer.handle_message("toggle-theme", "no-emit")
    renderer.handle_message("config", {"key": "darkTheme", "value": False})

    ui.editor.toggle_theme.assert_called_once_with()
    assert renderer.context.settings.dark_theme is True


def test_shown_snippets_config_after_manual_toggle_keeps_settings_hidden(renderer: Renderer, ui: Collaborators) -> None:
    renderer.handle_message("toggle-snippets", "no-emit")
    renderer.handle_message("config", {"key": "snippets", "value": True})

    ui.preview.toggle_snippets.assert_called_once_with()
    assert renderer.context.settings.snippets is False
