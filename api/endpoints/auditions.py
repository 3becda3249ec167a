from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import AuditionCreate, AuditionStatusResponse
from domain.services import auditions

router = APIRouter()


@router.post("/auditions", status_code=201)
def create_audition(body: AuditionCreate, user: Dict = Depends(current_user)):
    return auditions.create_audition(user, body.project_id, body.video_url, body.role_description,
                                     body.emotional_keywords, role_id=body.role_id)


@router.post("/auditions/{audition_id}/evaluate", response_model=AuditionStatusResponse,
             status_code=202)
async def evaluate(audition_id: str, user: Dict = Depends(current_user)) -> AuditionStatusResponse:
    audition = auditions.evaluate_audition(user, audition_id)
    return AuditionStatusResponse(id=audition["id"], status=audition["status"])


@router.get("/auditions/mine")
def list_mine(user: Dict = Depends(current_user)):
    return auditions.list_mine(user)


@router.get("/auditions/{audition_id}")
def get_audition(audition_id: str, user: Dict = Depends(current_user)):
    return auditions.get_audition(user, audition_id)


@router.get("/projects/{project_id}/auditions")
def list_for_project(project_id: str, user: Dict = Depends(current_user)):
    return auditions.list_for_project(user, project_id)
