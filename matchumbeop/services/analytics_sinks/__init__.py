"""
Analytics sinks package.

Each sink implements the AnalyticsSink ABC and delivers named events to one
backend.

Available sinks:
- FirebaseAnalyticsSink: GA4 Measurement Protocol with sampling and throttling
- LoggingAnalyticsSink: Writes events to the application log
"""

from matchumbeop.services.analytics_sinks.base import AnalyticsSink
from matchumbeop.services.analytics_sinks.firebase import FirebaseAnalyticsSink
from matchumbeop.services.analytics_sinks.logging_sink import LoggingAnalyticsSink

__all__ = ["AnalyticsSink", "FirebaseAnalyticsSink", "LoggingAnalyticsSink"]
