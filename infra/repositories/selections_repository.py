from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from infra.db.models import CompletedProject, TalentPortfolioProject
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class SelectionsRepository:
    def add_completed_project(self, fields: Dict) -> Dict:
        with SessionLocal() as s:
            row = CompletedProject(id=new_id("cmp"), **fields)
            s.add(row)
            s.commit()
            return row_to_dict(row)

    def add_portfolio_entry(self, fields: Dict) -> Optional[Dict]:
        """Returns None when the talent already has this project in the portfolio."""
        with SessionLocal() as s:
            row = TalentPortfolioProject(id=new_id("pfl"), **fields)
            s.add(row)
            try:
                s.commit()
            except IntegrityError:
                s.rollback()
                return None
            return row_to_dict(row)

    def list_completed(self, director_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(CompletedProject).where(CompletedProject.director_id == director_id)
                 .order_by(CompletedProject.completed_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def list_portfolio(self, talent_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(TalentPortfolioProject).where(TalentPortfolioProject.talent_id == talent_id)
                 .order_by(TalentPortfolioProject.selected_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]
