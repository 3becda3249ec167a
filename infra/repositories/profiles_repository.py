from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select

from infra.db.models import DirectorProfile, Profile, TalentCredit, TalentMedia, TalentProfile
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class ProfilesRepository:
    def create(self, email: str, full_name: Optional[str], user_type: str,
               bio: Optional[str] = None, avatar_url: Optional[str] = None) -> Dict:
        uid = new_id("usr")
        with SessionLocal() as s:
            profile = Profile(user_id=uid, email=email, full_name=full_name,
                              user_type=user_type, bio=bio, avatar_url=avatar_url)
            s.add(profile)
            s.flush()
            if user_type == "talent":
                s.add(TalentProfile(user_id=uid))
            else:
                s.add(DirectorProfile(user_id=uid))
            s.commit()
            return row_to_dict(profile)

    def get(self, user_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(Profile, user_id))

    def get_by_email(self, email: str) -> Optional[Dict]:
        with SessionLocal() as s:
            row = s.scalars(select(Profile).where(Profile.email == email)).first()
            return row_to_dict(row)

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, Dict]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        with SessionLocal() as s:
            rows = s.scalars(select(Profile).where(Profile.user_id.in_(ids))).all()
            return {r.user_id: row_to_dict(r) for r in rows}

    def list_public(self, exclude_user_id: Optional[str] = None,
                    user_type: Optional[str] = None) -> List[Dict]:
        with SessionLocal() as s:
            q = select(Profile).order_by(Profile.created_at.desc())
            if exclude_user_id:
                q = q.where(Profile.user_id != exclude_user_id)
            if user_type:
                q = q.where(Profile.user_type == user_type)
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def update_profile(self, user_id: str, fields: Dict) -> Optional[Dict]:
        with SessionLocal() as s:
            profile = s.get(Profile, user_id)
            if not profile:
                return None
            for key, value in fields.items():
                setattr(profile, key, value)
            s.commit()
            return row_to_dict(profile)

    # talent side

    def get_talent(self, user_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(TalentProfile, user_id))

    def get_talents(self, user_ids: Iterable[str]) -> Dict[str, Dict]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        with SessionLocal() as s:
            rows = s.scalars(select(TalentProfile).where(TalentProfile.user_id.in_(ids))).all()
            return {r.user_id: row_to_dict(r) for r in rows}

    def list_talents(self, limit: Optional[int] = None) -> List[Dict]:
        with SessionLocal() as s:
            q = select(TalentProfile).order_by(TalentProfile.updated_at.desc())
            if limit:
                q = q.limit(limit)
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def update_talent(self, user_id: str, fields: Dict) -> Optional[Dict]:
        with SessionLocal() as s:
            talent = s.get(TalentProfile, user_id)
            if not talent:
                return None
            for key, value in fields.items():
                setattr(talent, key, value)
            s.commit()
            return row_to_dict(talent)

    def add_credit(self, talent_id: str, fields: Dict) -> Dict:
        with SessionLocal() as s:
            credit = TalentCredit(id=new_id("crd"), talent_id=talent_id, **fields)
            s.add(credit)
            s.commit()
            return row_to_dict(credit)

    def list_credits(self, talent_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(TalentCredit).where(TalentCredit.talent_id == talent_id)
                 .order_by(TalentCredit.year.desc(), TalentCredit.created_at.desc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def credit_counts(self, talent_ids: Iterable[str]) -> Dict[str, int]:
        ids = list(set(talent_ids))
        if not ids:
            return {}
        with SessionLocal() as s:
            rows = s.execute(
                select(TalentCredit.talent_id, func.count(TalentCredit.id))
                .where(TalentCredit.talent_id.in_(ids))
                .group_by(TalentCredit.talent_id)
            ).all()
            return {tid: n for tid, n in rows}

    def add_media(self, talent_id: str, fields: Dict) -> Dict:
        with SessionLocal() as s:
            media = TalentMedia(id=new_id("med"), talent_id=talent_id, **fields)
            s.add(media)
            s.commit()
            return row_to_dict(media)

    def count_media(self, talent_id: str) -> int:
        with SessionLocal() as s:
            return s.scalar(
                select(func.count(TalentMedia.id)).where(TalentMedia.talent_id == talent_id)
            ) or 0

    # director side

    def get_director(self, user_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(DirectorProfile, user_id))

    def update_director(self, user_id: str, fields: Dict) -> Optional[Dict]:
        with SessionLocal() as s:
            director = s.get(DirectorProfile, user_id)
            if not director:
                return None
            for key, value in fields.items():
                setattr(director, key, value)
            s.commit()
            return row_to_dict(director)
