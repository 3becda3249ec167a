from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select, update

from infra.db.models import ForumAttachment, ForumPost, ForumThread
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class ForumsRepository:
    def list_threads(self, category: Optional[str] = None) -> List[Dict]:
        with SessionLocal() as s:
            q = select(ForumThread).order_by(ForumThread.is_pinned.desc(),
                                             ForumThread.created_at.desc())
            if category:
                q = q.where(ForumThread.category == category)
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def post_counts(self, thread_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(thread_ids)
        if not ids:
            return {}
        with SessionLocal() as s:
            rows = s.execute(
                select(ForumPost.thread_id, func.count(ForumPost.id))
                .where(ForumPost.thread_id.in_(ids))
                .group_by(ForumPost.thread_id)
            ).all()
            return {tid: n for tid, n in rows}

    def create_thread(self, user_id: str, title: str, category: str, tags: List[str],
                      content: str) -> Dict:
        with SessionLocal() as s:
            thread = ForumThread(id=new_id("thr"), user_id=user_id, title=title,
                                 category=category, tags=tags, views=0)
            s.add(thread)
            s.add(ForumPost(id=new_id("pst"), thread_id=thread.id, user_id=user_id, content=content))
            s.commit()
            return row_to_dict(thread)

    def get_thread(self, thread_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(ForumThread, thread_id))

    def increment_views(self, thread_id: str) -> None:
        with SessionLocal() as s:
            s.execute(
                update(ForumThread).where(ForumThread.id == thread_id)
                .values(views=func.coalesce(ForumThread.views, 0) + 1)
            )
            s.commit()

    def list_posts(self, thread_id: str) -> List[Dict]:
        with SessionLocal() as s:
            posts = s.scalars(
                select(ForumPost).where(ForumPost.thread_id == thread_id)
                .order_by(ForumPost.created_at.asc())
            ).all()
            post_ids = [p.id for p in posts]
            attachments: Dict[str, List[Dict]] = {pid: [] for pid in post_ids}
            if post_ids:
                for att in s.scalars(select(ForumAttachment).where(
                        ForumAttachment.post_id.in_(post_ids)).order_by(ForumAttachment.created_at)):
                    attachments[att.post_id].append(row_to_dict(att))
            out = []
            for p in posts:
                item = row_to_dict(p)
                item["attachments"] = attachments[p.id]
                out.append(item)
            return out

    def create_post(self, thread_id: str, user_id: str, content: str,
                    attachments: List[Dict]) -> Dict:
        with SessionLocal() as s:
            post = ForumPost(id=new_id("pst"), thread_id=thread_id, user_id=user_id, content=content)
            s.add(post)
            rows = [ForumAttachment(id=new_id("att"), post_id=post.id, **a) for a in attachments]
            s.add_all(rows)
            s.commit()
            out = row_to_dict(post)
            out["attachments"] = [row_to_dict(r) for r in rows]
            return out
