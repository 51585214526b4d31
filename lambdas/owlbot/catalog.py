"""Entity catalogs: ordered, author-defined lists of campus entities.

Declaration order is part of the data. Entries go from least to most specific,
and a conflict marker for a group must come before every entry that
disambiguates it. The resolver keeps the *last* match, so a narrower alias
declared later always beats a broader one declared earlier.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern

KIND_RESOLVED = "resolved"
KIND_CONFLICT = "conflict"


class CatalogError(ValueError):
    """Catalog data breaks the ordering or grouping contract."""


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    pattern: Pattern
    kind: str = KIND_RESOLVED
    group: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_conflict(self) -> bool:
        return self.kind == KIND_CONFLICT

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


@dataclass(frozen=True)
class ConflictGroup:
    name: str
    members: List[str]


class EntityCatalog:
    def __init__(self, entries: List[CatalogEntry], groups: Dict[str, ConflictGroup], name: str = "catalog"):
        self.name = name
        self.entries = list(entries)
        self.groups = dict(groups)
        self._by_name = {e.name: e for e in self.entries if not e.is_conflict}
        self.validate()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> Optional[CatalogEntry]:
        return self._by_name.get(name)

    def group_for(self, entry: CatalogEntry) -> ConflictGroup:
        return self.groups[entry.group]

    def validate(self) -> None:
        positions = {e.name: i for i, e in enumerate(self.entries) if not e.is_conflict}
        for i, entry in enumerate(self.entries):
            if not entry.is_conflict:
                continue
            group = self.groups.get(entry.group)
            if group is None:
                raise CatalogError(f"{self.name}: marker {entry.name!r} references unknown group {entry.group!r}")
            if len(group.members) < 2:
                raise CatalogError(f"{self.name}: group {group.name!r} needs at least two members")
            for member in group.members:
                if member not in positions:
                    raise CatalogError(f"{self.name}: group {group.name!r} member {member!r} is not declared")
                if positions[member] < i:
                    raise CatalogError(
                        f"{self.name}: member {member!r} is declared before the {group.name!r} conflict marker"
                    )


def compile_pattern(raw: str) -> Pattern:
    return re.compile(raw, re.IGNORECASE)


def build_catalog(data: Dict[str, Any], name: str = "catalog") -> EntityCatalog:
    """Build a catalog from its JSON form.

    Expected shape::

        {"groups": {"Anderson": ["M.D. Anderson Hall", ...]},
         "entries": [{"name": "Anderson", "pattern": "anderson", "conflict": "Anderson"},
                     {"name": "M.D. Anderson Hall", "pattern": "...", "metadata": {...}}]}
    """
    groups = {
        gname: ConflictGroup(name=gname, members=list(members or []))
        for gname, members in (data.get("groups") or {}).items()
    }
    entries: List[CatalogEntry] = []
    for raw in data.get("entries") or []:
        ename = (raw.get("name") or "").strip()
        if not raw.get("pattern"):
            raise CatalogError(f"{name}: entry {ename!r} has no pattern")
        try:
            pattern = compile_pattern(raw["pattern"])
        except re.error as e:
            raise CatalogError(f"{name}: bad pattern for {ename!r}: {e}") from e
        conflict = raw.get("conflict")
        if conflict:
            entries.append(CatalogEntry(name=ename, pattern=pattern, kind=KIND_CONFLICT, group=conflict))
            continue
        metadata = raw.get("metadata")
        if not isinstance(metadata, dict) or not metadata:
            raise CatalogError(f"{name}: entry {ename!r} has no metadata")
        entries.append(CatalogEntry(name=ename, pattern=pattern, metadata=dict(metadata)))
    return EntityCatalog(entries, groups, name=name)
