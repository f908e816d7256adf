"""Push gateway client with exponential backoff retry logic"""

import asyncio
import logging
import httpx
from typing import Any, Dict, List
from obligation_reminders.config import settings
from obligation_reminders.domain.exceptions import PushDeliveryError
from obligation_reminders.domain.models import ReminderRecord
from obligation_reminders.infrastructure.observability.metrics import push_latency_histogram, push_failure_counter

logger = logging.getLogger(__name__)


def build_push_payload(record: ReminderRecord) -> Dict[str, Any]:
    """Shape a reminder the way the push gateway expects it"""
    return {
        "userId": record.user_id,
        "title": record.title,
        "message": record.message,
        "url": record.action_url,
        "tag": f"{record.notification_type}-{record.obligation_id}",
        "priority": record.priority.value,
        "notificationType": record.notification_type,
    }


class PushClient:
    """Client for forwarding reminders to the push notification gateway"""

    def __init__(self, gateway_url: str | None = None, token: str | None = None):
        self.gateway_url = gateway_url if gateway_url is not None else settings.push_gateway_url
        self.token = token if token is not None else settings.push_gateway_token
        self.timeout = settings.http_timeout_seconds
        self.max_retries = settings.push_max_retries
        self.backoff_base = settings.push_backoff_base

    @property
    def enabled(self) -> bool:
        return bool(self.gateway_url)

    async def send_reminder(self, record: ReminderRecord) -> None:
        """
        Deliver one reminder to the push gateway with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s (base * 2^attempt)
        - Retries on 5xx errors and network failures, 4xx fails immediately

        Raises:
            PushDeliveryError: When all attempts fail
        """
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = build_push_payload(record)
        attempt = 0

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    with push_latency_histogram.time():
                        response = await client.post(self.gateway_url, json=payload, headers=headers)
                        response.raise_for_status()
                        return

                except httpx.HTTPStatusError as e:
                    push_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise PushDeliveryError(f"Push gateway rejected reminder: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise PushDeliveryError(f"Push gateway error: {e.response.status_code}") from e

                except httpx.RequestError as e:
                    push_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise PushDeliveryError(f"Push gateway unreachable: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)

    async def send_reminders(self, records: List[ReminderRecord]) -> int:
        """Forward a batch of reminders; failures are logged per reminder. Returns number delivered."""
        delivered = 0
        for record in records:
            try:
                await self.send_reminder(record)
                delivered += 1
            except PushDeliveryError as e:
                logger.error(
                    f"Push delivery failed: {e}",
                    extra={"obligation_id": record.obligation_id, "notification_type": record.notification_type},
                )
        return delivered
