"""
Unit tests for the analytics event dispatcher.
"""
from unittest.mock import MagicMock, patch

import pytest

from matchumbeop.schemas.analytics import (
    ApplicationKind,
    SpellChecked,
    SpellCheckMethod,
    TextCopied,
    spell_checked,
    text_copied,
)
from matchumbeop.services.analytics import AnalyticsDispatcher, create_analytics_dispatcher
from matchumbeop.services.analytics_sinks import FirebaseAnalyticsSink, LoggingAnalyticsSink
from tests.stubs import FailingSink, RecordingSink


class TestAnalyticsEvents:
    """Tests for event variants."""

    def test_text_copied_has_no_parameters(self):
        event = text_copied()
        assert event.name == "text_copied"
        assert event.parameters == {}
        assert event.application == ApplicationKind.MATCHUMBEOP

    def test_spell_checked_parameters(self):
        event = spell_checked(SpellCheckMethod.IN_APP, 42)
        assert event.name == "spell_checked"
        assert event.parameters == {"method": "in_app", "length": 42}

    def test_spell_checked_rejects_negative_length(self):
        with pytest.raises(ValueError):
            SpellChecked(method=SpellCheckMethod.IN_APP, length=-1)

    def test_events_are_immutable(self):
        event = text_copied()
        with pytest.raises(ValueError):
            event.application = ApplicationKind.MACHUMBUB


class TestAnalyticsDispatcher:
    """Tests for AnalyticsDispatcher.send()."""

    @pytest.mark.asyncio
    async def test_send_forwards_to_every_sink(self):
        first, second = RecordingSink(), RecordingSink()
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP], sinks=[first, second])

        await dispatcher.send(text_copied())

        assert first.events == [("text_copied", {}, False)]
        assert second.events == [("text_copied", {}, False)]

    @pytest.mark.asyncio
    async def test_send_many_with_force_send_preserves_order(self):
        first, second = RecordingSink(), RecordingSink()
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP], sinks=[first, second])
        event_a = text_copied()
        event_b = spell_checked(SpellCheckMethod.IN_APP, 7)

        await dispatcher.send(event_a, event_b, force_send=True)

        expected = [
            ("text_copied", {}, True),
            ("spell_checked", {"method": "in_app", "length": 7}, True),
        ]
        assert first.events == expected
        assert second.events == expected

    @pytest.mark.asyncio
    async def test_event_from_other_application_is_dropped(self):
        sink = RecordingSink()
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP], sinks=[sink])

        await dispatcher.send(TextCopied(application=ApplicationKind.MACHUMBUB))
        await dispatcher.send(
            SpellChecked(method=SpellCheckMethod.SERVICE, length=3, application=ApplicationKind.MACHUMBUB),
            force_send=True,
        )

        assert sink.events == []

    @pytest.mark.asyncio
    async def test_only_foreign_events_in_group_are_dropped(self):
        sink = RecordingSink()
        dispatcher = AnalyticsDispatcher(["machumbub"], sinks=[sink])

        await dispatcher.send(
            text_copied(ApplicationKind.MATCHUMBEOP),
            text_copied(ApplicationKind.MACHUMBUB),
        )

        assert sink.events == [("text_copied", {}, False)]
        assert dispatcher.accepts(text_copied(ApplicationKind.MACHUMBUB))
        assert not dispatcher.accepts(text_copied(ApplicationKind.MATCHUMBEOP))

    @pytest.mark.asyncio
    async def test_failing_sink_does_not_stop_delivery(self):
        failing, recording = FailingSink(), RecordingSink()
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP], sinks=[failing, recording])

        await dispatcher.send(text_copied(), spell_checked(SpellCheckMethod.IN_APP, 1))

        assert failing.attempts == 2
        assert [name for name, _, _ in recording.events] == ["text_copied", "spell_checked"]

    @pytest.mark.asyncio
    async def test_send_without_sinks_is_noop(self):
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP])
        await dispatcher.send(text_copied())
        assert dispatcher.sinks == []

    @pytest.mark.asyncio
    async def test_register_sink(self):
        dispatcher = AnalyticsDispatcher([ApplicationKind.MATCHUMBEOP])
        sink = RecordingSink()

        dispatcher.register_sink(sink)
        await dispatcher.send(text_copied())

        assert dispatcher.sinks == [sink]
        assert len(sink.events) == 1

    def test_unknown_application_raises(self):
        with pytest.raises(ValueError):
            AnalyticsDispatcher(["unknown-app"])


class TestCreateAnalyticsDispatcher:
    """Tests for the dispatcher factory."""

    def test_logging_provider(self):
        dispatcher = create_analytics_dispatcher("logging")

        assert len(dispatcher.sinks) == 1
        assert isinstance(dispatcher.sinks[0], LoggingAnalyticsSink)
        assert ApplicationKind.MATCHUMBEOP in dispatcher.applications

    def test_firebase_provider(self):
        mock_settings = MagicMock()
        mock_settings.analytics_applications_list = ["matchumbeop", "machumbub"]

        with patch("matchumbeop.services.analytics.settings", mock_settings), \
                patch("matchumbeop.services.analytics.FirebaseAnalyticsSink") as sink_class:
            sink_class.return_value = MagicMock(spec=FirebaseAnalyticsSink)
            dispatcher = create_analytics_dispatcher("firebase")

        sink_class.assert_called_once_with()
        assert dispatcher.applications == {ApplicationKind.MATCHUMBEOP, ApplicationKind.MACHUMBUB}

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported analytics provider"):
            create_analytics_dispatcher("mixpanel")
