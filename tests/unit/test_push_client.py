"""Unit tests for push gateway forwarding"""

import asyncio
import httpx
import pytest
from datetime import date
from unittest.mock import AsyncMock, patch
from obligation_reminders.domain.exceptions import PushDeliveryError
from obligation_reminders.domain.models import ObligationKind, Priority, ReminderRecord
from obligation_reminders.infrastructure.clients.push import PushClient, build_push_payload

GATEWAY_URL = "http://push.test/send-push-notification"


@pytest.fixture
def reminder() -> ReminderRecord:
    return ReminderRecord(
        user_id="user_1",
        obligation_id="loan-1",
        obligation_kind=ObligationKind.LOAN,
        notification_type="loan_overdue",
        days_until_due=-5,
        due_date=date(2024, 3, 5),
        priority=Priority.HIGH,
        title="Loan Payment Overdue: Car Loan",
        message="Car Loan (Vehicle loan) payment is 5 days overdue.",
        action_url="/loans",
        created_date=date(2024, 3, 10),
    )


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", GATEWAY_URL))


def test_build_push_payload(reminder):
    payload = build_push_payload(reminder)

    assert payload["userId"] == "user_1"
    assert payload["priority"] == "high"
    assert payload["notificationType"] == "loan_overdue"
    assert payload["url"] == "/loans"
    assert payload["tag"] == "loan_overdue-loan-1"


def test_push_client_disabled_without_url():
    assert PushClient(gateway_url="").enabled is False
    assert PushClient(gateway_url=GATEWAY_URL).enabled is True


@patch("obligation_reminders.infrastructure.clients.push.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_reminder_retries_server_errors(mock_post, mock_sleep, reminder):
    mock_post.side_effect = [_response(503), _response(200)]
    client = PushClient(gateway_url=GATEWAY_URL, token="secret")

    asyncio.run(client.send_reminder(reminder))

    assert mock_post.await_count == 2
    assert mock_post.call_args.kwargs["headers"] == {"Authorization": "Bearer secret"}
    mock_sleep.assert_awaited_once_with(client.backoff_base)


@patch("obligation_reminders.infrastructure.clients.push.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_reminder_client_error_not_retried(mock_post, mock_sleep, reminder):
    mock_post.return_value = _response(400)
    client = PushClient(gateway_url=GATEWAY_URL)

    with pytest.raises(PushDeliveryError):
        asyncio.run(client.send_reminder(reminder))

    assert mock_post.await_count == 1
    mock_sleep.assert_not_awaited()


@patch("obligation_reminders.infrastructure.clients.push.asyncio.sleep", new_callable=AsyncMock)
@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_send_reminders_logs_and_continues(mock_post, mock_sleep, reminder):
    client = PushClient(gateway_url=GATEWAY_URL)
    mock_post.side_effect = [httpx.ConnectError("refused")] * client.max_retries + [_response(201)]

    delivered = asyncio.run(client.send_reminders([reminder, reminder]))

    assert delivered == 1
    assert mock_post.await_count == client.max_retries + 1
