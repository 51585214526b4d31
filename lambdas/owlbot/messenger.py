import hashlib
import hmac
import json
import logging
import threading
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError

from . import config as cfg

logger = logging.getLogger(__name__)

_LAMBDA = None


def _lambda():
    global _LAMBDA
    if _LAMBDA is None:
        _LAMBDA = boto3.client("lambda", region_name=cfg.AWS_REGION)
    return _LAMBDA


class SignatureError(Exception):
    """The webhook body was not signed with our app secret."""


def verify_signature(body: bytes, signature: Optional[str]) -> None:
    if not signature:
        if cfg.FEATURE_STRICT_SIGNATURE:
            raise SignatureError("Missing X-Hub-Signature header")
        logger.error("Couldn't validate the signature.")
        return
    method, _, signature_hash = signature.partition("=")
    expected = hmac.new(cfg.MESSENGER_APP_SECRET.encode("utf-8"), body, hashlib.sha1).hexdigest()
    if method != "sha1" or not hmac.compare_digest(signature_hash, expected):
        raise SignatureError("Couldn't validate the request signature.")


# --- Send API payloads ---

def build_message(intent: Dict[str, Any]) -> Dict[str, Any]:
    kind = intent.get("type")
    if kind == "image":
        return {"attachment": {"type": "image", "payload": {"url": intent.get("url", "")}}}
    if kind == "quickReplies":
        return {
            "text": intent.get("text", ""),
            "quick_replies": [
                {"content_type": "text", "title": o.get("label", ""), "payload": o.get("payload", "")}
                for o in intent.get("options", [])
            ],
        }
    return {"text": intent.get("text", "")}


def build_send_payload(recipient_id: str, intent: Dict[str, Any]) -> Dict[str, Any]:
    return {"recipient": {"id": recipient_id}, "message": build_message(intent)}


def call_send_api(message_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    recipient_id = message_data.get("recipient", {}).get("id")
    try:
        resp = requests.post(
            cfg.GRAPH_API_URL,
            params={"access_token": cfg.MESSENGER_PAGE_ACCESS_TOKEN},
            json=message_data,
            timeout=cfg.SEND_TIMEOUT_SECONDS,
        )
    except requests.RequestException:
        logger.exception("Failed calling Send API for recipient %s", recipient_id)
        return None
    if resp.status_code != 200:
        logger.error("Failed calling Send API: %s %s", resp.status_code, resp.text[:1000])
        return None
    body = resp.json()
    if body.get("message_id"):
        logger.info("Successfully sent message with id %s to recipient %s", body["message_id"], body.get("recipient_id"))
    else:
        logger.info("Successfully called Send API for recipient %s", body.get("recipient_id"))
    return body


def deliver(recipient_id: str, intents: List[Dict[str, Any]], sleep: Callable[[float], None] = time.sleep) -> None:
    """Send intents in order, waiting out each one's delay first.

    Runs after the turn has finished and released the user's lock: inline
    from dispatch, on a dispatcher thread, or inside the sender worker.
    """
    for intent in intents:
        delay_ms = intent.get("delay_ms") or 0
        if delay_ms > 0:
            sleep(delay_ms / 1000.0)
        call_send_api(build_send_payload(recipient_id, intent))


class Dispatcher:
    """Fire-and-forget delivery with per-recipient ordering.

    Each recipient gets at most one drain thread at a time, which sends that
    recipient's batches in submission order. The thread exits once its queue
    is empty.
    """

    def __init__(self, send: Callable[[str, List[Dict[str, Any]]], None] = deliver):
        self._send = send
        self._queues: Dict[str, Deque[List[Dict[str, Any]]]] = {}
        self._threads: Dict[str, threading.Thread] = {}
        self._guard = threading.Lock()

    def submit(self, recipient_id: str, intents: List[Dict[str, Any]]) -> None:
        if not intents:
            return
        with self._guard:
            q = self._queues.get(recipient_id)
            if q is not None:
                q.append(list(intents))
                return
            self._queues[recipient_id] = deque([list(intents)])
            t = threading.Thread(target=self._drain, args=(recipient_id,), daemon=True)
            self._threads[recipient_id] = t
        t.start()

    def _drain(self, recipient_id: str) -> None:
        while True:
            with self._guard:
                q = self._queues[recipient_id]
                if not q:
                    del self._queues[recipient_id]
                    del self._threads[recipient_id]
                    return
                batch = q.popleft()
            try:
                self._send(recipient_id, batch)
            except Exception:
                logger.exception("Delivery to %s failed", recipient_id)

    def join(self, timeout: Optional[float] = None) -> None:
        with self._guard:
            threads = list(self._threads.values())
        for t in threads:
            t.join(timeout)


_DISPATCHER = Dispatcher()


def dispatch(recipient_id: str, intents: List[Dict[str, Any]]) -> None:
    """Hand a turn's intents off for delivery.

    With SENDER_FUNCTION_NAME set, the sender Lambda is invoked asynchronously
    and the webhook returns at once. Otherwise the intents are delivered before
    returning, unless FEATURE_THREADED_DELIVERY hands them to a local
    per-recipient thread (long-running processes only).
    """
    if not intents:
        return
    if cfg.SENDER_FUNCTION_NAME:
        try:
            _lambda().invoke(
                FunctionName=cfg.SENDER_FUNCTION_NAME,
                InvocationType="Event",
                Payload=json.dumps({"recipient_id": recipient_id, "intents": intents}).encode("utf-8"),
            )
            return
        except (BotoCoreError, ClientError):
            logger.exception("Async invoke of %s failed, delivering in-process", cfg.SENDER_FUNCTION_NAME)
    if cfg.FEATURE_THREADED_DELIVERY:
        _DISPATCHER.submit(recipient_id, intents)
        return
    deliver(recipient_id, intents)
