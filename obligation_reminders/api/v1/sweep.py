"""POST /v1/reminders/sweep - scheduled reminder sweep endpoints"""

import time
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from obligation_reminders.api.v1.schemas import SweepRequest, SweepResponse
from obligation_reminders.api.dependencies import get_push_client, get_request_id, get_today, verify_cron_secret
from obligation_reminders.infrastructure.database.session import get_db
from obligation_reminders.infrastructure.database.repositories import SqlReminderStore
from obligation_reminders.infrastructure.clients.push import PushClient
from obligation_reminders.domain.models import ObligationKind
from obligation_reminders.domain.reminders import sweep_obligations
from obligation_reminders.domain.exceptions import StorageReadError
from obligation_reminders.infrastructure.observability.metrics import record_sweep, record_sweep_failure
from obligation_reminders.infrastructure.observability.logging import log_sweep

router = APIRouter()


def _run_sweep(
    kinds: List[ObligationKind],
    today: date,
    request_id: str,
    db: Session,
    push_client: PushClient,
    background_tasks: BackgroundTasks,
) -> SweepResponse:
    """
    Run one bounded sweep and report its summary.

    Flow:
    1. List active obligations for every requested kind
    2. Evaluate due dates, dedup and write reminders one obligation at a time
    3. Forward created reminders to the push gateway in the background
    4. Return counts (per-item write failures do not fail the sweep)
    """
    start_time = time.time()

    try:
        summary = sweep_obligations(SqlReminderStore(db), kinds, today)
    except StorageReadError as e:
        record_sweep_failure()
        logging.error(f"Reminder sweep aborted: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to list obligations")

    if summary.created and push_client.enabled:
        background_tasks.add_task(push_client.send_reminders, summary.created)

    duration_ms = (time.time() - start_time) * 1000
    record_sweep(summary)
    log_sweep(request_id, summary, duration_ms)

    return SweepResponse(
        success=True,
        obligations_checked=summary.obligations_checked,
        notifications_created=summary.notifications_created,
        duplicates_skipped=summary.duplicates_skipped,
        write_failures=summary.write_failures,
        kinds=summary.kinds,
    )


@router.post("/reminders/sweep", response_model=SweepResponse, dependencies=[Depends(verify_cron_secret)])
def sweep_all(
    request: Request,
    background_tasks: BackgroundTasks,
    request_body: Optional[SweepRequest] = None,
    db: Session = Depends(get_db),
    push_client: PushClient = Depends(get_push_client),
    today: date = Depends(get_today),
):
    """Sweep every obligation kind (or the kinds named in the body)"""
    kinds = list(ObligationKind)
    if request_body is not None:
        kinds = request_body.kinds or kinds
        today = request_body.as_of or today

    return _run_sweep(kinds, today, get_request_id(request), db, push_client, background_tasks)


@router.post("/reminders/{kind}/sweep", response_model=SweepResponse, dependencies=[Depends(verify_cron_secret)])
def sweep_kind(
    kind: ObligationKind,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    push_client: PushClient = Depends(get_push_client),
    today: date = Depends(get_today),
):
    """Sweep a single obligation kind"""
    return _run_sweep([kind], today, get_request_id(request), db, push_client, background_tasks)
