from typing import Dict, List, Optional

from sqlalchemy import delete, func, select

from infra.db.models import Conversation, ConversationParticipant, Message, _utcnow
from infra.db.session import SessionLocal
from infra.repositories.base import new_id, row_to_dict


class MessagesRepository:
    def find_direct_conversation(self, user_a: str, user_b: str) -> Optional[str]:
        """Id of a conversation whose participants are exactly user_a and user_b."""
        with SessionLocal() as s:
            mine = select(ConversationParticipant.conversation_id).where(
                ConversationParticipant.user_id == user_a)
            theirs = select(ConversationParticipant.conversation_id).where(
                ConversationParticipant.user_id == user_b)
            two_party = (
                select(ConversationParticipant.conversation_id)
                .group_by(ConversationParticipant.conversation_id)
                .having(func.count(ConversationParticipant.id) == 2)
            )
            return s.scalars(
                select(Conversation.id).where(
                    Conversation.id.in_(mine),
                    Conversation.id.in_(theirs),
                    Conversation.id.in_(two_party),
                )
            ).first()

    def create_conversation(self, user_ids: List[str]) -> Dict:
        with SessionLocal() as s:
            convo = Conversation(id=new_id("cnv"))
            s.add(convo)
            for uid in user_ids:
                s.add(ConversationParticipant(id=new_id("cpt"), conversation_id=convo.id, user_id=uid))
            s.commit()
            return row_to_dict(convo)

    def get(self, conversation_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            return row_to_dict(s.get(Conversation, conversation_id))

    def participants(self, conversation_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = select(ConversationParticipant).where(
                ConversationParticipant.conversation_id == conversation_id)
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def list_for_user(self, user_id: str, archived: bool = False) -> List[Dict]:
        with SessionLocal() as s:
            rows = s.execute(
                select(Conversation, ConversationParticipant.muted)
                .join(ConversationParticipant,
                      ConversationParticipant.conversation_id == Conversation.id)
                .where(ConversationParticipant.user_id == user_id,
                       Conversation.archived.is_(archived))
                .order_by(Conversation.updated_at.desc())
            ).all()
            out = []
            for convo, muted in rows:
                item = row_to_dict(convo)
                item["muted"] = bool(muted)
                out.append(item)
            return out

    def last_message(self, conversation_id: str) -> Optional[Dict]:
        with SessionLocal() as s:
            row = s.scalars(
                select(Message).where(Message.conversation_id == conversation_id)
                .order_by(Message.created_at.desc())
            ).first()
            return row_to_dict(row)

    def list_messages(self, conversation_id: str) -> List[Dict]:
        with SessionLocal() as s:
            q = (select(Message).where(Message.conversation_id == conversation_id)
                 .order_by(Message.created_at.asc()))
            return [row_to_dict(r) for r in s.scalars(q).all()]

    def add_message(self, conversation_id: str, sender_id: str, content: str) -> Dict:
        with SessionLocal() as s:
            msg = Message(id=new_id("msg"), conversation_id=conversation_id,
                          sender_id=sender_id, content=content)
            s.add(msg)
            convo = s.get(Conversation, conversation_id)
            convo.updated_at = _utcnow()
            s.commit()
            return row_to_dict(msg)

    def delete_conversation(self, conversation_id: str) -> None:
        with SessionLocal() as s:
            s.execute(delete(Message).where(Message.conversation_id == conversation_id))
            s.execute(delete(ConversationParticipant).where(
                ConversationParticipant.conversation_id == conversation_id))
            s.execute(delete(Conversation).where(Conversation.id == conversation_id))
            s.commit()

    def set_muted(self, conversation_id: str, user_id: str, muted: bool) -> None:
        with SessionLocal() as s:
            row = s.scalars(select(ConversationParticipant).where(
                ConversationParticipant.conversation_id == conversation_id,
                ConversationParticipant.user_id == user_id,
            )).first()
            if row:
                row.muted = muted
                s.commit()

    def set_archived(self, conversation_id: str, archived: bool) -> None:
        with SessionLocal() as s:
            convo = s.get(Conversation, conversation_id)
            if convo:
                convo.archived = archived
                s.commit()
