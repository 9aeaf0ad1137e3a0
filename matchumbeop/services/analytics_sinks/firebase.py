"""
Firebase analytics sink.

Sends events through the Google Analytics 4 Measurement Protocol using the
Firebase app stream credentials (firebase_app_id + api_secret).

Events are sampled (ANALYTICS_SAMPLE_RATE) and throttled with a token bucket
(ANALYTICS_RATE_LIMIT_REQUESTS per ANALYTICS_RATE_LIMIT_PERIOD seconds).
force_send skips both.
"""
import random
import uuid
from typing import Mapping, Optional

import httpx

from matchumbeop.config import settings
from matchumbeop.schemas.analytics import ParameterValue
from matchumbeop.services.analytics_sinks.base import AnalyticsSink
from matchumbeop.services.rate_limiter import TokenBucketRateLimiter
from matchumbeop.utils.logger import get_logger

logger = get_logger("analytics.firebase")


class FirebaseAnalyticsSink(AnalyticsSink):
    """Analytics sink posting to the GA4 Measurement Protocol."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_secret: Optional[str] = None,
        app_instance_id: Optional[str] = None,
        sample_rate: Optional[float] = None,
        rate_limiter: Optional[TokenBucketRateLimiter] = None,
        collect_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Firebase analytics sink.

        Args:
            app_id: Firebase app ID (if None, uses settings.FIREBASE_APP_ID)
            api_secret: Measurement Protocol secret (if None, uses settings.FIREBASE_API_SECRET)
            app_instance_id: Installation ID (if None, uses settings or a random one)
            sample_rate: Fraction of events delivered (if None, uses settings.ANALYTICS_SAMPLE_RATE)
            rate_limiter: Token bucket for throttling (default built from config)
            collect_url: Measurement Protocol endpoint
            timeout: Request timeout in seconds
        """
        self.app_id = app_id or settings.FIREBASE_APP_ID
        self.api_secret = api_secret or settings.FIREBASE_API_SECRET
        self.app_instance_id = (
            app_instance_id or settings.FIREBASE_APP_INSTANCE_ID or uuid.uuid4().hex
        )
        self.sample_rate = sample_rate if sample_rate is not None else settings.ANALYTICS_SAMPLE_RATE
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter()
        self.collect_url = collect_url or settings.FIREBASE_COLLECT_URL
        self.timeout = timeout or settings.ANALYTICS_TIMEOUT_SECONDS

        if not self.app_id:
            raise ValueError("FIREBASE_APP_ID is required for FirebaseAnalyticsSink")
        if not self.api_secret:
            raise ValueError("FIREBASE_API_SECRET is required for FirebaseAnalyticsSink")
        if not 0.0 <= self.sample_rate <= 1.0:
            raise ValueError("ANALYTICS_SAMPLE_RATE must be between 0.0 and 1.0")

        logger.info(
            "FirebaseAnalyticsSink initialized",
            app_id=self.app_id,
            sample_rate=self.sample_rate,
        )

    async def send_analytics_event(
        self,
        name: str,
        parameters: Mapping[str, ParameterValue],
        force_send: bool = False,
    ) -> None:
        if not force_send:
            if random.random() >= self.sample_rate:
                logger.debug("Analytics event sampled out", event_name=name)
                return
            if not await self.rate_limiter.try_acquire():
                logger.debug("Analytics event throttled", event_name=name)
                return

        payload = {
            "app_instance_id": self.app_instance_id,
            "events": [{"name": name, "params": dict(parameters)}],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.collect_url,
                    params={"firebase_app_id": self.app_id, "api_secret": self.api_secret},
                    json=payload,
                )
                response.raise_for_status()

            logger.debug("Analytics event delivered", event_name=name, force_send=force_send)

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Analytics delivery rejected",
                event_name=name,
                status_code=e.response.status_code,
            )
        except Exception as e:
            logger.warning("Analytics delivery failed", event_name=name, error=str(e))
