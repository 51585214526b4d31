from typing import Any, Dict, List

from .. import config as cfg
from ..utils import build_image, build_text


def fun_fact(fact: str) -> List[Dict[str, Any]]:
    return [build_text(fact)]


def asset_url(path: str) -> str:
    if not path or path.startswith("http://") or path.startswith("https://"):
        return path
    if not cfg.SERVER_URL:
        return ""
    return f"{cfg.SERVER_URL}/{path.lstrip('/')}"


def exploration_spot(spot: Dict[str, str]) -> List[Dict[str, Any]]:
    intents = [build_text(spot.get("description", ""))]
    image = asset_url(spot.get("image", ""))
    if image:
        intents.append(build_image(image))
    if spot.get("map"):
        intents.append(build_text(f"Here's how to get there: {spot['map']}"))
    return intents
