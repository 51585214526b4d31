from typing import Any, Dict, List

from .. import config as cfg
from ..catalog import CatalogEntry
from ..utils import build_text

NOT_FOUND_TEXT = "Sorry, I don't know that business or servery. Try a name like \"North Servery\" or \"Coffeehouse\"."


def render_identification(entry: CatalogEntry) -> str:
    return f"{entry.name} is in {entry.metadata.get('location', 'an unlisted location')}."


def render_hours(entry: CatalogEntry) -> str:
    return f"Hours: {entry.metadata.get('hours', 'not listed')}"


def render_map(entry: CatalogEntry) -> str:
    return f"Map: {entry.metadata.get('map', 'not available')}"


def render_full(entry: CatalogEntry) -> str:
    return "\n".join((render_identification(entry), render_hours(entry), render_map(entry)))


def identified(entry: CatalogEntry) -> List[Dict[str, Any]]:
    # Hours and map follow the identification after a short pause each
    return [
        build_text(render_identification(entry)),
        build_text(render_hours(entry), delay_ms=cfg.FOLLOWUP_DELAY_MS),
        build_text(render_map(entry), delay_ms=cfg.FOLLOWUP_DELAY_MS),
    ]


def not_found() -> List[Dict[str, Any]]:
    return [build_text(NOT_FOUND_TEXT)]
