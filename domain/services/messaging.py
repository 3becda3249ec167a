from typing import Dict, List

from domain.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from infra.repositories.messages_repository import MessagesRepository
from infra.repositories.profiles_repository import ProfilesRepository

messages_repo = MessagesRepository()
profiles_repo = ProfilesRepository()


def _require_participant(user: Dict, conversation_id: str) -> List[Dict]:
    if not messages_repo.get(conversation_id):
        raise NotFoundError("Conversation not found")
    participants = messages_repo.participants(conversation_id)
    if user["user_id"] not in {p["user_id"] for p in participants}:
        raise PermissionDeniedError("You are not part of this conversation")
    return participants


def start_conversation(user: Dict, other_user_id: str) -> Dict:
    if other_user_id == user["user_id"]:
        raise InvalidInputError("You cannot start a conversation with yourself")
    if not profiles_repo.get(other_user_id):
        raise NotFoundError("User not found")
    existing = messages_repo.find_direct_conversation(user["user_id"], other_user_id)
    if existing:
        return dict(messages_repo.get(existing), created=False)
    convo = messages_repo.create_conversation([user["user_id"], other_user_id])
    return dict(convo, created=True)


def list_conversations(user: Dict, archived: bool = False) -> List[Dict]:
    convos = messages_repo.list_for_user(user["user_id"], archived=archived)
    others = {}
    for c in convos:
        ids = [p["user_id"] for p in messages_repo.participants(c["id"]) if p["user_id"] != user["user_id"]]
        others[c["id"]] = ids[0] if ids else None
    profiles = profiles_repo.get_many(uid for uid in others.values() if uid)
    out = []
    for c in convos:
        last = messages_repo.last_message(c["id"])
        out.append(dict(
            c,
            other_user=profiles.get(others[c["id"]]),
            last_message=last["content"] if last else None,
            last_message_at=last["created_at"] if last else None,
        ))
    return out


def list_messages(user: Dict, conversation_id: str) -> List[Dict]:
    _require_participant(user, conversation_id)
    return messages_repo.list_messages(conversation_id)


def send_message(user: Dict, conversation_id: str, content: str) -> Dict:
    _require_participant(user, conversation_id)
    content = (content or "").strip()
    if not content:
        raise InvalidInputError("Message cannot be empty")
    return messages_repo.add_message(conversation_id, user["user_id"], content)


def delete_conversation(user: Dict, conversation_id: str) -> None:
    _require_participant(user, conversation_id)
    messages_repo.delete_conversation(conversation_id)


def set_muted(user: Dict, conversation_id: str, muted: bool) -> None:
    _require_participant(user, conversation_id)
    messages_repo.set_muted(conversation_id, user["user_id"], muted)


def set_archived(user: Dict, conversation_id: str, archived: bool) -> None:
    _require_participant(user, conversation_id)
    messages_repo.set_archived(conversation_id, archived)
