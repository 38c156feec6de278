"""Tests for the feedback viewer page callbacks and the app factory."""

from __future__ import annotations

from dataclasses import replace

import pytest

from feedback_dashboard.app import create_app, not_found_page
from feedback_dashboard.components import LOADING_TEXT
from feedback_dashboard.controller import ControllerRegistry
from feedback_dashboard.pages import feedback_viewer
from feedback_dashboard.utils.db_connection import QueryError

pytestmark = pytest.mark.unit


@pytest.fixture
def registry(fake_client) -> ControllerRegistry:
    return ControllerRegistry(fake_client)


class TestUpdateUsers:
    def test_initial_load(self, registry, settings, text_of) -> None:
        strip, options, status = feedback_viewer.update_users("s-1", registry, settings)

        assert len(options) == 4
        assert "carol@example.com" in text_of(strip)
        assert status == []

    def test_users_failure_is_visible(self, registry, fake_client, settings, text_of) -> None:
        fake_client.failures["user_profiles"] = QueryError("boom")

        strip, options, status = feedback_viewer.update_users("s-1", registry, settings)

        assert strip is None
        assert len(options) == 1
        assert text_of(status) == "Failed to load users"


class TestUpdateDetail:
    def test_placeholder_selection_renders_nothing(self, registry, fake_client, settings) -> None:
        feedback_viewer.update_users("s-1", registry, settings)
        fake_client.queries.clear()

        status, items, feedback = feedback_viewer.update_detail("", "s-1", registry, settings)

        assert fake_client.queries == []
        assert status == []
        assert items is None
        assert feedback.children == []

    def test_selection_renders_records(self, registry, settings, text_of) -> None:
        feedback_viewer.update_users("s-1", registry, settings)

        status, items, feedback = feedback_viewer.update_detail("bob@example.com", "s-1", registry, settings)

        assert LOADING_TEXT not in text_of(status)
        assert "passport" in text_of(items)
        text = text_of(feedback)
        assert "Location: Not provided" in text
        assert "Was Correct: ❌ No" in text

    def test_unchanged_selection_does_not_refetch(self, registry, fake_client, settings) -> None:
        feedback_viewer.update_users("s-1", registry, settings)
        feedback_viewer.update_detail("alice@example.com", "s-1", registry, settings)
        fake_client.queries.clear()

        feedback_viewer.update_detail("alice@example.com", "s-1", registry, settings)

        assert fake_client.queries == []

    def test_strict_nulls_setting_reaches_rendering(self, registry, settings, text_of) -> None:
        strict = replace(settings, strict_nulls=True)
        feedback_viewer.update_users("s-1", registry, strict)

        _, _, feedback = feedback_viewer.update_detail("alice@example.com", "s-1", registry, strict)

        assert "Was Correct: ✅ Yes" in text_of(feedback)

    def test_sessions_are_isolated(self, registry, settings) -> None:
        feedback_viewer.update_users("s-1", registry, settings)
        feedback_viewer.update_users("s-2", registry, settings)
        feedback_viewer.update_detail("alice@example.com", "s-1", registry, settings)

        assert registry.get("s-2").state.feedback == []

    def test_users_error_is_not_repeated_in_detail_status(self, registry, fake_client, settings, text_of) -> None:
        fake_client.failures["user_profiles"] = QueryError("boom")

        _, _, users_status = feedback_viewer.update_users("s-1", registry, settings)
        detail_status, _, _ = feedback_viewer.update_detail("", "s-1", registry, settings)

        assert text_of(users_status) == "Failed to load users"
        assert detail_status == []

    def test_detail_error_stays_out_of_users_status(self, registry, fake_client, settings, text_of) -> None:
        feedback_viewer.update_users("s-1", registry, settings)
        fake_client.failures["stored_items"] = QueryError("boom")

        detail_status, _, _ = feedback_viewer.update_detail("alice@example.com", "s-1", registry, settings)

        assert text_of(detail_status) == "Failed to load data"

    def test_evicted_session_reloads_users_before_selecting(self, fake_client, settings, text_of) -> None:
        registry = ControllerRegistry(fake_client, max_sessions=1)
        feedback_viewer.update_users("s-1", registry, settings)
        feedback_viewer.update_users("s-2", registry, settings)

        detail_status, items, _ = feedback_viewer.update_detail("alice@example.com", "s-1", registry, settings)

        assert detail_status == []
        assert "keys" in text_of(items)


class TestApp:
    def test_create_app_registers_callbacks(self, settings, fake_client) -> None:
        app = create_app(settings, client=fake_client)

        assert "page-content.children" in app.callback_map
        assert any("email-selector.options" in key for key in app.callback_map)
        assert any("feedback-container.children" in key for key in app.callback_map)

    def test_not_found_page(self, text_of) -> None:
        assert "404: Page Not Found" in text_of(not_found_page())

    def test_loading_indicator_shows_loading_text(self, text_of) -> None:
        loading = feedback_viewer.layout().children[-1]
        assert loading.id == "loading-detail"
        assert text_of(loading.custom_spinner) == LOADING_TEXT

    def test_layout_gets_fresh_session_ids(self) -> None:
        first = feedback_viewer.layout().children[0].data
        second = feedback_viewer.layout().children[0].data
        assert first != second
