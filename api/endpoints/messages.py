from typing import Dict

from fastapi import APIRouter, Depends

from api.deps import current_user
from domain.schemas import ConversationCreate, FlagUpdate, MessageCreate
from domain.services import messaging

router = APIRouter(prefix="/conversations")


@router.post("", status_code=201)
def start_conversation(body: ConversationCreate, user: Dict = Depends(current_user)):
    return messaging.start_conversation(user, body.other_user_id)


@router.get("")
def list_conversations(archived: bool = False, user: Dict = Depends(current_user)):
    return messaging.list_conversations(user, archived=archived)


@router.get("/{conversation_id}/messages")
def list_messages(conversation_id: str, user: Dict = Depends(current_user)):
    return messaging.list_messages(user, conversation_id)


@router.post("/{conversation_id}/messages", status_code=201)
def send_message(conversation_id: str, body: MessageCreate, user: Dict = Depends(current_user)):
    return messaging.send_message(user, conversation_id, body.content)


@router.delete("/{conversation_id}", status_code=204)
def delete_conversation(conversation_id: str, user: Dict = Depends(current_user)):
    messaging.delete_conversation(user, conversation_id)


@router.put("/{conversation_id}/muted")
def set_muted(conversation_id: str, body: FlagUpdate, user: Dict = Depends(current_user)):
    messaging.set_muted(user, conversation_id, body.value)
    return {"id": conversation_id, "muted": body.value}


@router.put("/{conversation_id}/archived")
def set_archived(conversation_id: str, body: FlagUpdate, user: Dict = Depends(current_user)):
    messaging.set_archived(user, conversation_id, body.value)
    return {"id": conversation_id, "archived": body.value}
