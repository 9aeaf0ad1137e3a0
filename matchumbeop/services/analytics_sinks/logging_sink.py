"""
Analytics sink that writes events to the application log.
"""
from typing import Mapping

from matchumbeop.schemas.analytics import ParameterValue
from matchumbeop.services.analytics_sinks.base import AnalyticsSink
from matchumbeop.utils.logger import get_logger

logger = get_logger("analytics.logging_sink")


class LoggingAnalyticsSink(AnalyticsSink):
    """Logs every event. Used when no analytics backend is configured."""

    async def send_analytics_event(
        self,
        name: str,
        parameters: Mapping[str, ParameterValue],
        force_send: bool = False,
    ) -> None:
        logger.info(
            f"Analytics event: {name}",
            event_name=name,
            force_send=force_send,
            **{f"param_{key}": value for key, value in parameters.items()},
        )
