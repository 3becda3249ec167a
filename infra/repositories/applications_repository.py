from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, update

from infra.db.models import Application
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class ApplicationsRepository:
    def create(self, project_id: str, talent_id: str, video_url: str,
               role_id: Optional[str] = None, audio_url: Optional[str] = None,
               cover_letter: Optional[str] = None) -> Dict:
        with SessionLocal() as s:
            app = Application(id=new_id("app"), project_id=project_id, talent_id=talent_id,
                              role_id=role_id, video_url=video_url, audio_url=audio_url,
                              cover_letter=cover_letter, status="pending")
            s.add(app)
            s.commit()
            return row_to_dict(app)

    def get(self, application_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(Application, application_id))

    def find(self, project_id: str, talent_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            row = s.scalars(select(Application).where(
                Application.project_id == project_id,
                Application.talent_id == talent_id,
            )).first()
            return row_to_dict(row)

    def list_for_project(self, project_id: str, exclude_status: Optional[str] = "rejected") -> List[Dict]:
        with SessionLocal() as s:
            q = select(Application).where(Application.project_id == project_id)
            if exclude_status:
                q = q.where(Application.status != exclude_status)
            q = q.order_by(Application.applied_at.desc())
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def list_for_talent(self, talent_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Application).where(Application.talent_id == talent_id)
                 .order_by(Application.applied_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def set_status(self, application_ids: Iterable[str], status: str) -> int:
        ids = list(application_ids)
        if not ids:
            return 0
        with SessionLocal() as s:
            res = s.execute(
                update(Application).where(Application.id.in_(ids)).values(status=status)
            )
            s.commit()
            return res.rowcount

    def reject(self, application_id: str) -> None:
        """Auto-rejection from the pre-filter: status rejected, score zero."""
        with SessionLocal() as s:
            app = s.get(Application, application_id)
            if not app:
                return
            app.status = "rejected"
            app.ai_match_score = 0
            s.commit()

    def set_scores(self, scores: Dict[str, int]) -> None:
        if not scores:
            return
        with SessionLocal() as s:
            for app_id, score in scores.items():
                app = s.get(Application, app_id)
                if app:
                    app.ai_match_score = score
            s.commit()
