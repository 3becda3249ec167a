from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import ApplicationCreate, ProjectCreate, ProjectStatusUpdate
from domain.services import applications, projects

router = APIRouter()


@router.post("/projects", status_code=201)
def create_project(body: ProjectCreate, user: Dict = Depends(current_user)):
    fields = body.model_dump(exclude={"roles"})
    return projects.create_project(user, fields, [r.model_dump() for r in body.roles])


@router.get("/projects")
def list_projects(user: Dict = Depends(current_user)):
    return projects.list_projects(user)


@router.get("/projects/{project_id}")
def get_project(project_id: str, user: Dict = Depends(current_user)):
    return projects.get_project(project_id)


@router.patch("/projects/{project_id}/status")
def update_status(project_id: str, body: ProjectStatusUpdate, user: Dict = Depends(current_user)):
    return projects.update_project_status(user, project_id, body.status)


@router.post("/projects/{project_id}/applications", status_code=201)
def apply(project_id: str, body: ApplicationCreate, user: Dict = Depends(current_user)):
    return applications.apply(user, project_id, body.video_url, role_id=body.role_id,
                              audio_url=body.audio_url, cover_letter=body.cover_letter)


@router.get("/projects/{project_id}/applications")
def list_applications(project_id: str, user: Dict = Depends(current_user)):
    return applications.list_for_project(user, project_id)
