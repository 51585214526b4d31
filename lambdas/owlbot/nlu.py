import re
from typing import Optional

# --- Normalization helpers ---

_WS_RE = re.compile(r"\s+")

# Phone keyboards send curly quotes
_QUOTES = str.maketrans({"\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"'})


def normalize(text: Optional[str]) -> str:
    """Trim, case-fold, straighten curly quotes and collapse whitespace.

    Punctuation is kept: catalog patterns accept variants such as "M.D." and
    "M D" themselves.
    """
    return _WS_RE.sub(" ", (text or "").translate(_QUOTES).strip().lower())


def normalize_command(text: Optional[str]) -> str:
    return normalize(text).rstrip("!.?").strip()


# --- Global commands ---

CMD_MENU = "menu"
CMD_DIRECTIONS = "directions"
CMD_BUSINESSES = "businesses"
CMD_EXPLORE = "explore"
CMD_FUN_FACTS = "fun facts"
CMD_ABOUT = "about"
CMD_HELP = "help"
CMD_FEEDBACK = "feedback"
CMD_EASTER_EGG = "easter egg"

EASTER_EGG_PHRASE = "sammy the owl"

COMMAND_SYNONYMS = {
    CMD_MENU: {"menu", "main menu", "back", "go back", "exit", "quit", "escape"},
    CMD_DIRECTIONS: {"directions", "direction", "get directions"},
    CMD_BUSINESSES: {"businesses", "business", "servery", "serveries", "business-servery", "business/servery"},
    CMD_EXPLORE: {"explore", "explore campus"},
    CMD_FUN_FACTS: {"fun facts", "fun fact", "facts", "fact"},
    CMD_ABOUT: {"about", "about owlbot", "who are you"},
    CMD_HELP: {"help", "commands", "what can you do"},
    CMD_FEEDBACK: {"feedback", "give feedback"},
    CMD_EASTER_EGG: {EASTER_EGG_PHRASE},
}

_COMMAND_LOOKUP = {syn: cmd for cmd, syns in COMMAND_SYNONYMS.items() for syn in syns}


def match_command(text: Optional[str]) -> Optional[str]:
    """Return the global command named by the whole input, if any."""
    if normalize(text) == "?":
        return CMD_HELP
    t = normalize_command(text)
    if not t:
        return None
    return _COMMAND_LOOKUP.get(t)
