from typing import Dict, List, Optional

from sqlalchemy import select

from infra.db.models import Project, ProjectRole
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


def _with_roles(project: Project) -> Dict:
    out = row_to_dict(project)
    out["roles"] = [row_to_dict(r) for r in project.roles]
    return out


class ProjectsRepository:
    def create(self, director_id: str, fields: Dict, roles: List[Dict]) -> Dict:
        with SessionLocal() as s:
            project = Project(id=new_id("prj"), director_id=director_id, **fields)
            for role in roles:
                project.roles.append(ProjectRole(id=new_id("rol"), **role))
            s.add(project)
            s.commit()
            return _with_roles(project)

    def get(self, project_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            project = s.get(Project, project_id)
            if not project:
                return None
            return _with_roles(project)

    def list_by_status(self, status: str) -> List[Dict]:
        with SessionLocal() as s:
            q = select(Project).where(Project.status == status).order_by(Project.created_at.desc())
            return [_with_roles(p) for p in s.scalars(q).all()]

    def list_by_director(self, director_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Project).where(Project.director_id == director_id)
                 .order_by(Project.created_at.desc()))
            return [_with_roles(p) for p in s.scalars(q).all()]

    def update(self, project_id: str, **fields) -> Optional[Dict]:
        with SessionLocal() as s:
            project = s.get(Project, project_id)
            if not project:
                return None
            for key, value in fields.items():
                setattr(project, key, value)
            s.commit()
            return _with_roles(project)

    def get_role(self, role_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(ProjectRole, role_id))
