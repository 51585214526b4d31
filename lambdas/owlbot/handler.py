import base64
import json
import logging
from typing import Any, Dict, List, Optional

from . import config as cfg
from . import messenger
from .dialog import DialogStateMachine, build_machine
from .utils import build_text, get_user_id, parse_turn

logger = logging.getLogger()
logger.setLevel(cfg.LOG_LEVEL)

_MACHINE: Optional[DialogStateMachine] = None  # lives as long as the container


def get_machine() -> DialogStateMachine:
    global _MACHINE
    if _MACHINE is None:
        _MACHINE = build_machine()
    return _MACHINE


def _response(status: int, body: str = "") -> Dict[str, Any]:
    return {"statusCode": status, "headers": {"Content-Type": "text/plain"}, "body": body}


def _header(event: Dict[str, Any], name: str) -> Optional[str]:
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == name.lower():
            return value
    return None


def _http_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method") or ""
    return method.upper()


def _raw_body(event: Dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8")


# --- Webhook verification ---

def verify_webhook(event: Dict[str, Any]) -> Dict[str, Any]:
    params = event.get("queryStringParameters") or {}
    token = params.get("hub.verify_token")
    if params.get("hub.mode") == "subscribe" and token and token == cfg.MESSENGER_VALIDATION_TOKEN:
        logger.info("Validating webhook")
        return _response(200, params.get("hub.challenge") or "")
    logger.error("Failed validation. Make sure the validation tokens match.")
    return _response(403, "Forbidden")


# --- Messaging events ---

def received_message(messaging_event: Dict[str, Any]) -> List[Dict[str, Any]]:
    turn = parse_turn(messaging_event)
    if turn is None:
        return []
    logger.info("Received %s from user %s at %s", turn.kind, turn.user_id, messaging_event.get("timestamp"))
    intents = get_machine().handle_turn(turn)
    messenger.dispatch(turn.user_id, intents)
    return intents


def received_authentication(messaging_event: Dict[str, Any]) -> List[Dict[str, Any]]:
    sender_id = get_user_id(messaging_event)
    logger.info(
        "Received authentication for user %s with pass through param '%s'",
        sender_id,
        (messaging_event.get("optin") or {}).get("ref"),
    )
    intents = [build_text("Authentication successful")]
    messenger.dispatch(sender_id, intents)
    return intents


def received_delivery_confirmation(messaging_event: Dict[str, Any]) -> None:
    delivery = messaging_event.get("delivery") or {}
    for mid in delivery.get("mids") or []:
        logger.info("Received delivery confirmation for message ID: %s", mid)
    logger.info("All messages before %s were delivered.", delivery.get("watermark"))


def received_message_read(messaging_event: Dict[str, Any]) -> None:
    read = messaging_event.get("read") or {}
    logger.info("Received message read event for watermark %s and sequence number %s", read.get("watermark"), read.get("seq"))


def handle_messaging_event(messaging_event: Dict[str, Any]) -> List[Dict[str, Any]]:
    if messaging_event.get("optin"):
        return received_authentication(messaging_event)
    if messaging_event.get("message"):
        return received_message(messaging_event)
    if messaging_event.get("delivery"):
        received_delivery_confirmation(messaging_event)
    elif messaging_event.get("read"):
        received_message_read(messaging_event)
    else:
        logger.info("Webhook received unknown messagingEvent: %s", json.dumps(messaging_event)[:2000])
    return []


# API Gateway proxy entrypoint

def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    method = _http_method(event)
    if method == "GET":
        return verify_webhook(event)
    if method != "POST":
        return _response(405, "Method Not Allowed")

    body = _raw_body(event)
    try:
        messenger.verify_signature(body, _header(event, "X-Hub-Signature"))
    except messenger.SignatureError as e:
        logger.error("%s", e)
        return _response(403, "Forbidden")

    try:
        data = json.loads(body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.error("Webhook body is not valid JSON")
        return _response(400, "Bad Request")

    if data.get("object") != "page":
        return _response(404, "Not Found")

    # Batched deliveries carry several entries, each with several events
    for page_entry in data.get("entry") or []:
        for messaging_event in page_entry.get("messaging") or []:
            handle_messaging_event(messaging_event)

    return _response(200, "EVENT_RECEIVED")
