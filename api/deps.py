from typing import Dict, Optional

from fastapi import Header, HTTPException

from infra.repositories.profiles_repository import ProfilesRepository

profiles_repo = ProfilesRepository()


def current_user(x_user_id: Optional[str] = Header(default=None)) -> Dict:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    profile = profiles_repo.get(x_user_id)
    if not profile:
        raise HTTPException(status_code=401, detail="Unknown user")
    return profile
