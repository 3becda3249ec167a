from typing import Dict, List, Optional

from sqlalchemy import select

from infra.db.models import Audition, AuditionEvaluation
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class AuditionsRepository:
    def create(self, project_id: str, talent_id: str, video_url: str, role_description: str,
               emotional_keywords: List[str], role_id: Optional[str] = None) -> Dict:
        with SessionLocal() as s:
            aud = Audition(id=new_id("aud"), project_id=project_id, role_id=role_id,
                           talent_id=talent_id, video_url=video_url,
                           role_description=role_description,
                           emotional_keywords=emotional_keywords, status="pending")
            s.add(aud)
            s.commit()
            return row_to_dict(aud)

    def get(self, audition_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(Audition, audition_id))

    def update_status(self, audition_id: str, status: str, error: Optional[str] = None) -> None:
        with SessionLocal() as s:
            aud = s.get(Audition, audition_id)
            if not aud:
                return
            aud.status = status
            aud.error = error
            s.commit()

    def complete(self, audition_id: str, evaluation: Dict) -> Dict:
        """Store the evaluation and flip the audition to completed in one commit."""
        with SessionLocal() as s:
            aud = s.get(Audition, audition_id)
            if not aud:
                raise KeyError("audition not found")
            ev = AuditionEvaluation(id=new_id("eval"), audition_id=audition_id, **evaluation)
            s.add(ev)
            aud.status = "completed"
            aud.error = None
            s.commit()
            return row_to_dict(ev)

    def latest_evaluation(self, audition_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            row = s.scalars(
                select(AuditionEvaluation)
                .where(AuditionEvaluation.audition_id == audition_id)
                .order_by(AuditionEvaluation.created_at.desc())
            ).first()
            return row_to_dict(row)

    def list_for_project(self, project_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Audition).where(Audition.project_id == project_id)
                 .order_by(Audition.created_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def list_for_talent(self, talent_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Audition).where(Audition.talent_id == talent_id)
                 .order_by(Audition.created_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]
