from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.services import notifications

router = APIRouter(prefix="/notifications")


@router.get("")
def list_notifications(user: Dict = Depends(current_user)):
    return notifications.list_notifications(user)


@router.post("/read-all")
def mark_all_read(user: Dict = Depends(current_user)):
    return {"updated": notifications.mark_all_read(user)}


@router.post("/{notification_id}/read", status_code=204)
def mark_read(notification_id: str, user: Dict = Depends(current_user)):
    notifications.mark_read(user, notification_id)
