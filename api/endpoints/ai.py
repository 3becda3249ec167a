from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import (
    AnalyzeProfileRequest, MatchTalentRequest, RecommendCandidatesRequest, ShortlistResponse,
)
from domain.services import matching
from domain.services.shortlisting import shortlist_applicants

router = APIRouter(prefix="/ai")


@router.post("/projects/{project_id}/shortlist", response_model=ShortlistResponse)
async def shortlist(project_id: str, user: Dict = Depends(current_user)):
    return await shortlist_applicants(user, project_id)


@router.post("/match-talent")
async def match_talent(body: MatchTalentRequest, user: Dict = Depends(current_user)):
    return await matching.match_talent(body.talent_id, body.role_id)


@router.post("/analyze-profile")
async def analyze_profile(body: AnalyzeProfileRequest, user: Dict = Depends(current_user)):
    return await matching.analyze_profile(body.talent_id or user["user_id"])


@router.post("/recommend-candidates")
async def recommend_candidates(body: RecommendCandidatesRequest, user: Dict = Depends(current_user)):
    return await matching.recommend_candidates(user, body.project_id, body.role_id, body.limit)
