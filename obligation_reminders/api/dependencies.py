"""Dependency injection for FastAPI endpoints"""

import logging
import secrets
from datetime import date, datetime
from zoneinfo import ZoneInfo
from fastapi import Depends, HTTPException, Request, status
from obligation_reminders.config import Settings, get_settings
from obligation_reminders.infrastructure.clients.push import PushClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def verify_cron_secret(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """
    Gate scheduler-triggered endpoints behind the shared cron secret.

    Fails closed: with no secret configured every call is refused with 500,
    otherwise a missing or wrong Bearer token is refused with 401.
    """
    expected = settings.cron_auth_secret
    if not expected:
        logging.error("CRON_AUTH_SECRET not configured - sweep endpoints are disabled")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfigured",
        )

    auth_header = request.headers.get("Authorization", "")
    scheme, _, provided = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logging.warning("Unauthorized cron call attempt", extra={"request_id": get_request_id(request)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_today(settings: Settings = Depends(get_settings)) -> date:
    """Current calendar date in the reminder timezone"""
    return datetime.now(ZoneInfo(settings.reminder_timezone)).date()


def get_push_client() -> PushClient:
    """Provide push gateway client instance"""
    return PushClient()
