from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Messenger caps quick reply titles at 20 characters
MAX_LABEL_LENGTH = 20

KIND_TEXT = "text"
KIND_QUICK_REPLY = "quickReply"
KIND_ATTACHMENT = "attachment"


@dataclass(frozen=True)
class TurnEvent:
    user_id: str
    kind: str
    text: Optional[str] = None
    payload: Optional[str] = None

    @property
    def is_quick_reply(self) -> bool:
        return self.kind == KIND_QUICK_REPLY

    @property
    def content(self) -> str:
        return (self.payload if self.is_quick_reply else self.text) or ""


# --- Response intents ---

def build_text(text: str, delay_ms: int = 0) -> Dict[str, Any]:
    return {"type": "text", "text": text, "delay_ms": delay_ms}


def build_image(url: str, delay_ms: int = 0) -> Dict[str, Any]:
    return {"type": "image", "url": url, "delay_ms": delay_ms}


def build_option(label: str, payload: str) -> Dict[str, str]:
    return {"label": truncate_label(label), "payload": payload}


def build_quick_replies(text: str, options: List[Dict[str, str]], delay_ms: int = 0) -> Dict[str, Any]:
    return {"type": "quickReplies", "text": text, "options": options, "delay_ms": delay_ms}


def truncate_label(label: str) -> str:
    return (label or "")[:MAX_LABEL_LENGTH]


# --- Inbound Messenger events ---

def get_user_id(messaging_event: Dict[str, Any]) -> str:
    return str((messaging_event.get("sender") or {}).get("id") or "")


def parse_turn(messaging_event: Dict[str, Any]) -> Optional[TurnEvent]:
    """Turn a Messenger ``message`` callback into a TurnEvent.

    Returns None for echoes and for messages carrying nothing we act on.
    Quick replies take priority: Messenger also copies the button title into
    ``text`` for them.
    """
    message = messaging_event.get("message") or {}
    if not message or message.get("is_echo"):
        return None
    user_id = get_user_id(messaging_event)
    quick_reply = message.get("quick_reply")
    if quick_reply:
        return TurnEvent(user_id, KIND_QUICK_REPLY, text=message.get("text"), payload=quick_reply.get("payload") or "")
    if message.get("text"):
        return TurnEvent(user_id, KIND_TEXT, text=message["text"])
    if message.get("attachments"):
        return TurnEvent(user_id, KIND_ATTACHMENT)
    return None
