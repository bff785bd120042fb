# src/campus_market/api/v1/endpoints/chats.py
"""Chat endpoints between two users."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from campus_market.api.v1.dependencies import ChatsDep, StoreDep, TokenDep
from campus_market.api.v1.responses import run_action
from campus_market.schemas import ChatStart, MessageCreate

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("/")
def list_chats(chats: ChatsDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    """Return the caller's chats, most recently active first."""
    return run_action(store, token, chats.get_all_chats)


@router.post("/")
def start_chat(payload: ChatStart, chats: ChatsDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    """Open the chat with another user; repeated calls return the same chat."""
    return run_action(store, token, lambda caller: chats.start_chat(caller, payload.other_user_id))


@router.get("/{chat_id}")
def get_chat(chat_id: int, chats: ChatsDep, store: StoreDep, token: TokenDep) -> JSONResponse:
    return run_action(store, token, lambda caller: chats.get_chat(caller, chat_id))


@router.post("/{chat_id}/messages")
def send_message(
    chat_id: int,
    payload: MessageCreate,
    chats: ChatsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(store, token, lambda caller: chats.send_message(caller, chat_id, payload.text))


@router.delete("/{chat_id}/messages/{message_id}")
def delete_message(
    chat_id: int,
    message_id: int,
    chats: ChatsDep,
    store: StoreDep,
    token: TokenDep,
) -> JSONResponse:
    return run_action(
        store, token, lambda caller: chats.delete_message(caller, chat_id, message_id)
    )
