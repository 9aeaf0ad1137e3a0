"""
Abstract base class for analytics sinks.

A sink delivers named events to an analytics backend. Sampling and
throttling policies live in the sink; force_send asks the sink to skip
them for one event.
"""

from abc import ABC, abstractmethod
from typing import Mapping

from matchumbeop.schemas.analytics import ParameterValue


class AnalyticsSink(ABC):
    """
    Abstract base class for analytics sinks.

    Delivery is best effort. Implementations must contain their own
    failures: send_analytics_event never raises.
    """

    @abstractmethod
    async def send_analytics_event(
        self,
        name: str,
        parameters: Mapping[str, ParameterValue],
        force_send: bool = False,
    ) -> None:
        """
        Deliver one event.

        Args:
            name: Event name (e.g. "text_copied")
            parameters: Event parameters
            force_send: Bypass sampling and throttling
        """
        pass

    async def aclose(self) -> None:
        """Release network resources."""
        return None
