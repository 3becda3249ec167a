from typing import Dict, Optional

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import PostCreate, ThreadCreate
from domain.services import forums

router = APIRouter(prefix="/forums")


@router.get("/threads")
def list_threads(category: Optional[str] = None, user: Dict = Depends(current_user)):
    return forums.list_threads(category)


@router.post("/threads", status_code=201)
def create_thread(body: ThreadCreate, user: Dict = Depends(current_user)):
    return forums.create_thread(user, body.title, body.category, body.content, body.tags)


@router.get("/threads/{thread_id}")
def get_thread(thread_id: str, user: Dict = Depends(current_user)):
    return forums.get_thread(thread_id)


@router.post("/threads/{thread_id}/posts", status_code=201)
def create_post(thread_id: str, body: PostCreate, user: Dict = Depends(current_user)):
    return forums.create_post(user, thread_id, body.content, [a.model_dump() for a in body.attachments])
