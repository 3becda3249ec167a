from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from api.deps import current_user
from domain.schemas import (
    CreditCreate, DirectorProfileUpdate, MediaCreate, ProfileCreate, ProfileUpdate,
    TalentProfileUpdate,
)
from domain.services import profiles

router = APIRouter()


@router.post("/profiles", status_code=201)
def create_profile(body: ProfileCreate):
    return profiles.create_profile(body.email, body.full_name, body.user_type, body.bio, body.avatar_url)


@router.get("/profiles/me")
def get_me(user: Dict = Depends(current_user)):
    return profiles.get_profile(user["user_id"])


@router.get("/profiles/discover")
def discover(user_type: Optional[str] = None, user: Dict = Depends(current_user)):
    return profiles.discover(user, user_type)


@router.get("/profiles/{user_id}")
def get_profile(user_id: str, user: Dict = Depends(current_user)):
    return profiles.get_profile(user_id)


@router.patch("/profiles/me")
def update_me(body: ProfileUpdate, user: Dict = Depends(current_user)):
    return profiles.update_profile(user, body.model_dump(exclude_unset=True))


@router.patch("/profiles/me/talent")
async def update_talent(body: TalentProfileUpdate, user: Dict = Depends(current_user)):
    return await profiles.update_talent_profile(user, body.model_dump(exclude_unset=True))


@router.patch("/profiles/me/director")
def update_director(body: DirectorProfileUpdate, user: Dict = Depends(current_user)):
    return profiles.update_director_profile(user, body.model_dump(exclude_unset=True))


@router.post("/profiles/me/credits", status_code=201)
def add_credit(body: CreditCreate, user: Dict = Depends(current_user)):
    return profiles.add_credit(user, body.model_dump())


@router.post("/profiles/me/media", status_code=201)
def add_media(body: MediaCreate, user: Dict = Depends(current_user)):
    return profiles.add_media(user, body.model_dump())


@router.post("/profiles/me/resume", status_code=201)
async def upload_resume(resume: UploadFile = File(...), user: Dict = Depends(current_user)):
    content = await resume.read()
    return await profiles.upload_resume(user, resume.filename, content)
