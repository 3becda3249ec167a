from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import FinalizeSelectionRequest, ManualShortlistRequest
from domain.services import applications

router = APIRouter()


@router.get("/applications/mine")
def list_mine(user: Dict = Depends(current_user)):
    return applications.list_mine(user)


@router.post("/projects/{project_id}/shortlist/manual")
def manual_shortlist(project_id: str, body: ManualShortlistRequest, user: Dict = Depends(current_user)):
    return applications.manual_shortlist(user, project_id, body.application_ids)


@router.post("/projects/{project_id}/selection")
def finalize_selection(project_id: str, body: FinalizeSelectionRequest,
                       user: Dict = Depends(current_user)):
    return applications.finalize_selection(user, project_id, body.application_id, body.shortlist)
