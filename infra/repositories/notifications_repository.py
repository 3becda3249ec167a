from typing import Dict, List

from sqlalchemy import select, update

from infra.db.models import Notification
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class NotificationsRepository:
    def create_many(self, items: List[Dict]) -> int:
        if not items:
            return 0
        with SessionLocal() as s:
            for item in items:
                fields = dict(item)
                metadata = fields.pop("metadata", None)
                s.add(Notification(id=new_id("ntf"), metadata_=metadata, **fields))
            s.commit()
        return len(items)

    def list_for_user(self, user_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Notification).where(Notification.user_id == user_id)
                 .order_by(Notification.created_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        with SessionLocal() as s:
            row = s.get(Notification, notification_id)
            if not row or row.user_id != user_id:
                return False
            row.read = True
            s.commit()
            return True

    def mark_all_read(self, user_id: str) -> int:
        with SessionLocal() as s:
            res = s.execute(
                update(Notification)
                .where(Notification.user_id == user_id, Notification.read.is_(False))
                .values(read=True)
            )
            s.commit()
            return res.rowcount
