"""GET /v1/notifications - Fetch user's recent reminder notifications"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from obligation_reminders.api.v1.schemas import NotificationsResponse, NotificationItem
from obligation_reminders.infrastructure.database.session import get_db
from obligation_reminders.infrastructure.database.repositories import NotificationRepository

router = APIRouter()


@router.get("/notifications", response_model=NotificationsResponse)
def get_notifications(
    user_id: str = Query(..., description="User identifier"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent notifications for a user.

    Returns:
        Newest first, including reminders created by sweeps
    """
    notification_repo = NotificationRepository(db)
    notifications = notification_repo.list_for_user(user_id, limit=limit)

    items = [
        NotificationItem(
            notification_id=str(n.id),
            title=n.title,
            message=n.message,
            notification_type=n.notification_type,
            priority=n.priority,
            related_entity_type=n.related_entity_type,
            related_entity_id=str(n.related_entity_id) if n.related_entity_id else None,
            action_url=n.action_url,
            is_read=n.is_read,
            created_date=n.created_date,
        )
        for n in notifications
    ]

    return NotificationsResponse(user_id=user_id, notifications=items)
