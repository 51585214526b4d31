from typing import Any, Callable, Dict, List

from .. import config as cfg
from ..catalog import CatalogEntry
from ..utils import build_image, build_option, build_quick_replies, build_text

MENU_PROMPT = "How can I help?"
CLARIFY_PROMPT = "Did you mean:"

MENU_OPTIONS = (
    ("Directions", "directions"),
    ("Explore", "explore"),
    ("Business-Servery", "businesses"),
    ("Fun Facts", "fun facts"),
    ("About", "about"),
    ("Help", "help"),
)

ABOUT_TEXT = (
    "I'm OwlBot, a guide to Rice University's campus. I can give you directions to buildings, "
    "tell you about campus businesses and serveries, suggest places to explore, and share fun facts."
)

HELP_TEXT = (
    "Here's what you can say at any time:\n"
    "- \"directions\" to find a building\n"
    "- \"businesses\" or \"servery\" for campus food and shops\n"
    "- \"explore\" for a place worth visiting\n"
    "- \"fun facts\" for a bit of Rice trivia\n"
    "- \"feedback\" to tell us how we're doing\n"
    "- \"menu\", \"back\" or \"exit\" to return to the main menu"
)

ATTACHMENT_TEXT = "I can't understand attachments :/"


def main_menu() -> List[Dict[str, Any]]:
    options = [build_option(label, payload) for label, payload in MENU_OPTIONS]
    return [build_quick_replies(MENU_PROMPT, options)]


def about() -> List[Dict[str, Any]]:
    return [build_text(ABOUT_TEXT)]


def help_text() -> List[Dict[str, Any]]:
    return [build_text(HELP_TEXT)]


def feedback() -> List[Dict[str, Any]]:
    if cfg.FEEDBACK_URL:
        return [build_text(f"Thanks for helping improve OwlBot! Share your feedback here: {cfg.FEEDBACK_URL}")]
    return [build_text("Thanks for helping improve OwlBot! Feedback collection isn't open yet, check back soon.")]


def easter_egg() -> List[Dict[str, Any]]:
    intents = [build_text("Hoo hoo! You found Sammy the Owl.")]
    if cfg.SERVER_URL:
        intents.append(build_image(f"{cfg.SERVER_URL}/assets/sammy.png"))
    return intents


def attachment_not_understood() -> List[Dict[str, Any]]:
    return [build_text(ATTACHMENT_TEXT)]


def unknown_state(state: str) -> List[Dict[str, Any]]:
    return [build_text(f"Something went wrong: unexpected state '{state}'. Say \"menu\" to start over.")]


def clarification_menu(members: List[CatalogEntry], render: Callable[[CatalogEntry], str]) -> List[Dict[str, Any]]:
    """Ask which group member was meant.

    Each button's payload is that member's finished answer, so the reply to a
    tap is sent as-is without resolving again.
    """
    options = [build_option(m.name, render(m)) for m in members]
    return [build_quick_replies(CLARIFY_PROMPT, options)]
