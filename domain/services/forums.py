import logging
from typing import Dict, List, Optional

from domain.errors import InvalidInputError, NotFoundError
from infra.repositories.forums_repository import ForumsRepository
from infra.repositories.profiles_repository import ProfilesRepository

logger = logging.getLogger(__name__)

forums_repo = ForumsRepository()
profiles_repo = ProfilesRepository()

CATEGORIES = ("casting", "technology", "filmmaking", "news")
MAX_TAGS = 5


def _author(profile: Optional[Dict]) -> Optional[Dict]:
    if not profile:
        return None
    return {k: profile.get(k) for k in ("user_id", "full_name", "avatar_url", "user_type")}


def list_threads(category: Optional[str] = None) -> List[Dict]:
    if category and category not in CATEGORIES:
        raise InvalidInputError(f"category must be one of {', '.join(CATEGORIES)}")
    threads = forums_repo.list_threads(category)
    authors = profiles_repo.get_many(t["user_id"] for t in threads)
    counts = forums_repo.post_counts(t["id"] for t in threads)
    return [
        dict(t, author=_author(authors.get(t["user_id"])), post_count=counts.get(t["id"], 0))
        for t in threads
    ]


def create_thread(user: Dict, title: str, category: str, content: str,
                  tags: Optional[List[str]] = None) -> Dict:
    title, content = (title or "").strip(), (content or "").strip()
    if not title or not content:
        raise InvalidInputError("title and content are required")
    if category not in CATEGORIES:
        raise InvalidInputError(f"category must be one of {', '.join(CATEGORIES)}")
    clean_tags = list(dict.fromkeys(t.strip() for t in tags or [] if t and t.strip()))
    if len(clean_tags) > MAX_TAGS:
        raise InvalidInputError(f"At most {MAX_TAGS} tags are allowed")
    thread = forums_repo.create_thread(user["user_id"], title, category, clean_tags, content)
    logger.info(f"Thread {thread['id']} created in {category}")
    return thread


def get_thread(thread_id: str) -> Dict:
    thread = forums_repo.get_thread(thread_id)
    if not thread:
        raise NotFoundError("Thread not found")
    forums_repo.increment_views(thread_id)
    posts = forums_repo.list_posts(thread_id)
    authors = profiles_repo.get_many([thread["user_id"]] + [p["user_id"] for p in posts])
    return dict(
        thread,
        views=(thread.get("views") or 0) + 1,
        author=_author(authors.get(thread["user_id"])),
        posts=[dict(p, author=_author(authors.get(p["user_id"]))) for p in posts],
    )


def create_post(user: Dict, thread_id: str, content: str,
                attachments: Optional[List[Dict]] = None) -> Dict:
    if not forums_repo.get_thread(thread_id):
        raise NotFoundError("Thread not found")
    content = (content or "").strip()
    if not content:
        raise InvalidInputError("Post content cannot be empty")
    files = []
    for a in attachments or []:
        if not (a.get("file_name") and a.get("file_url") and a.get("file_type")):
            raise InvalidInputError("Attachments need file_name, file_url and file_type")
        files.append({
            "file_name": a["file_name"],
            "file_url": a["file_url"],
            "file_type": a["file_type"],
            "file_size": int(a.get("file_size") or 0),
        })
    return forums_repo.create_post(thread_id, user["user_id"], content, files)
