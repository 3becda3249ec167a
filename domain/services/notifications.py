from typing import Dict, List

from domain.errors import NotFoundError
from infra.repositories.notifications_repository import NotificationsRepository

notifications_repo = NotificationsRepository()


def list_notifications(user: Dict) -> List[Dict]:
    return notifications_repo.list_for_user(user["user_id"])


def mark_read(user: Dict, notification_id: str) -> None:
    if not notifications_repo.mark_read(notification_id, user["user_id"]):
        raise NotFoundError("Notification not found")


def mark_all_read(user: Dict) -> int:
    return notifications_repo.mark_all_read(user["user_id"])
