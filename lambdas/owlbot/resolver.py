import logging
from dataclasses import dataclass
from typing import Optional

from .catalog import CatalogEntry, ConflictGroup, EntityCatalog
from .nlu import normalize

logger = logging.getLogger(__name__)

RESOLVED = "resolved"
AMBIGUOUS = "ambiguous"
NOT_FOUND = "not_found"

# Names this short are placeholders, never real entities
MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class ResolutionResult:
    outcome: str
    entry: Optional[CatalogEntry] = None
    group: Optional[ConflictGroup] = None

    @property
    def resolved(self) -> bool:
        return self.outcome == RESOLVED

    @property
    def ambiguous(self) -> bool:
        return self.outcome == AMBIGUOUS


NOT_FOUND_RESULT = ResolutionResult(NOT_FOUND)


class EntityResolver:
    """Map free text onto at most one catalog entry.

    Every pattern is tried in declaration order and the last match wins, so a
    specific entry declared after a broad one (or after a conflict marker)
    takes precedence when both match.
    """

    def __init__(self, catalog: EntityCatalog):
        self.catalog = catalog

    def last_match(self, text: str) -> Optional[CatalogEntry]:
        t = normalize(text)
        if not t:
            return None
        matched = None
        for entry in self.catalog:
            if entry.matches(t):
                matched = entry
        return matched

    def resolve(self, text: str) -> ResolutionResult:
        entry = self.last_match(text)
        if entry is None:
            result = NOT_FOUND_RESULT
        elif entry.is_conflict:
            result = ResolutionResult(AMBIGUOUS, entry=entry, group=self.catalog.group_for(entry))
        elif len(entry.name) < MIN_NAME_LENGTH:
            result = NOT_FOUND_RESULT
        else:
            result = ResolutionResult(RESOLVED, entry=entry)
        logger.debug("resolve[%s] %r -> %s %s", self.catalog.name, text, result.outcome, entry.name if entry else "")
        return result

    def member_entries(self, group: ConflictGroup):
        return [self.catalog.get(name) for name in group.members]
