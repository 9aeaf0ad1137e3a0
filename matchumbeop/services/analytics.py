"""
Analytics event dispatcher.

Forwards events raised by the configured applications to every registered
sink. Events from other applications are dropped without error.
"""
from typing import Iterable, List, Optional, Union

from matchumbeop.config import settings
from matchumbeop.schemas.analytics import AnalyticsEvent, ApplicationKind
from matchumbeop.services.analytics_sinks import (
    AnalyticsSink,
    FirebaseAnalyticsSink,
    LoggingAnalyticsSink,
)
from matchumbeop.utils.logger import get_logger

logger = get_logger("services.analytics")


class AnalyticsDispatcher:
    """
    Stateless forwarding facade over a set of sinks.

    The sink registry is the only shared state. Concurrent send() calls
    are independent; events within one call are delivered in order.
    """

    def __init__(
        self,
        applications: Iterable[Union[str, ApplicationKind]],
        sinks: Optional[Iterable[AnalyticsSink]] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            applications: Application kinds whose events are forwarded
            sinks: Initial sinks
        """
        self.applications = frozenset(ApplicationKind(application) for application in applications)
        self._sinks: List[AnalyticsSink] = list(sinks or [])

    @property
    def sinks(self) -> List[AnalyticsSink]:
        return list(self._sinks)

    def register_sink(self, sink: AnalyticsSink) -> None:
        self._sinks.append(sink)

    def accepts(self, event: AnalyticsEvent) -> bool:
        """Whether the event belongs to one of the configured applications."""
        return event.application in self.applications

    async def send(self, *events: AnalyticsEvent, force_send: bool = False) -> None:
        """
        Send events to every sink, in order.

        Args:
            events: Events to send
            force_send: Ask sinks to bypass sampling and throttling
        """
        for event in events:
            if not self.accepts(event):
                logger.debug(
                    "Analytics event dropped, application not configured",
                    event_name=event.name,
                    application=event.application.value,
                )
                continue

            for sink in self._sinks:
                try:
                    await sink.send_analytics_event(event.name, event.parameters, force_send)
                except Exception as e:
                    logger.error(
                        "Analytics sink raised",
                        sink=type(sink).__name__,
                        event_name=event.name,
                        error=str(e),
                        exc_info=True,
                    )

    async def aclose(self) -> None:
        for sink in self._sinks:
            await sink.aclose()


def create_analytics_dispatcher(provider: Optional[str] = None) -> AnalyticsDispatcher:
    """
    Factory function to create the dispatcher with the configured sink.

    Args:
        provider: Sink provider ("logging", "firebase"). If None, uses settings.ANALYTICS_PROVIDER

    Returns:
        AnalyticsDispatcher for settings.ANALYTICS_APPLICATION

    Raises:
        ValueError: If provider is not supported or not configured
    """
    if provider is None:
        provider = settings.ANALYTICS_PROVIDER

    provider = provider.lower()

    if provider == "firebase":
        sink: AnalyticsSink = FirebaseAnalyticsSink()
    elif provider == "logging":
        sink = LoggingAnalyticsSink()
    else:
        raise ValueError(
            f"Unsupported analytics provider: {provider}. "
            f"Supported providers: logging, firebase"
        )

    logger.info(
        f"Creating analytics dispatcher with {provider} sink",
        applications=",".join(settings.analytics_applications_list),
    )
    return AnalyticsDispatcher(settings.analytics_applications_list, sinks=[sink])
