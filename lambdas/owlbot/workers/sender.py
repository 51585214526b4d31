import json
import logging
from typing import Any, Dict

from .. import config as cfg
from .. import messenger

logger = logging.getLogger()
logger.setLevel(cfg.LOG_LEVEL)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Deliver one turn's intents, in order, for the webhook handler."""
    recipient_id = (event.get("recipient_id") or "").strip()
    intents = event.get("intents") or []
    if not recipient_id:
        logger.error("Sender invoked without recipient: %s", json.dumps(event)[:2000])
        return {"delivered": 0, "error": "missing_recipient"}
    messenger.deliver(recipient_id, intents)
    return {"delivered": len(intents)}
