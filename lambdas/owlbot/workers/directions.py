from typing import Any, Dict, List

from ..catalog import CatalogEntry
from ..utils import build_text

NOT_FOUND_TEXT = "Sorry, I don't recognize that building. Try its full name, like \"Fondren Library\"."


def render_location(entry: CatalogEntry) -> str:
    return f"{entry.name} is located at {entry.metadata.get('address', '(address not listed)')}"


def located(entry: CatalogEntry) -> List[Dict[str, Any]]:
    return [build_text(render_location(entry))]


def not_found() -> List[Dict[str, Any]]:
    return [build_text(NOT_FOUND_TEXT)]
