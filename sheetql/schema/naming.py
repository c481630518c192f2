"""Naming conventions and per-build type name registry."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set
import keyword
import re

_INVALID_CHARS = re.compile(r"[^_0-9A-Za-z]")

# Type names every schema already defines.
BUILTIN_TYPE_NAMES = ("ID", "String", "Int", "Float", "Boolean")


def graphql_name(name: str) -> str:
    """Convert a free-form name into a valid GraphQL name."""
    clean = _INVALID_CHARS.sub("_", name)
    if not clean or clean[0].isdigit():
        clean = f"_{clean}"
    elif clean.startswith("__"):
        # Leading double underscores are reserved for introspection
        clean = "_" + clean.lstrip("_")
    return clean


def python_name(name: str, taken: Iterable[str] = ()) -> str:
    """Convert a GraphQL name into a Python identifier not in ``taken``."""
    candidate = graphql_name(name)
    if keyword.iskeyword(candidate):
        candidate = f"{candidate}_"
    taken = set(taken)
    unique = candidate
    counter = 1
    while unique in taken:
        unique = f"{candidate}_{counter}"
        counter += 1
    return unique


class NamingConvention:
    """Maps collection and column names onto query fields and relations.

    Subclass and override to support other conventions, e.g. snake_case
    foreign keys ending in ``_id``.
    """

    relation_suffix = "Id"

    def relation_target(self, field_name: str) -> Optional[str]:
        """Name of the singular collection a foreign key column refers to."""
        if field_name == "id" or not field_name.endswith(self.relation_suffix):
            return None
        return field_name[:-len(self.relation_suffix)]

    def singular(self, collection_name: str) -> str:
        """Strip a single trailing ``s``."""
        return collection_name[:-1] if collection_name.endswith("s") else collection_name

    def plural(self, singular_name: str) -> str:
        return singular_name + "s"

    def collection_for(self, target: str) -> str:
        """Collection searched when resolving a relation to ``target``."""
        name = target + "s"
        if name.endswith("ss"):
            name = name[:-2] + "s"
        return name


DEFAULT_NAMING = NamingConvention()


class TypeNameRegistry:
    """Hands out unique GraphQL type names.

    The first request for a name gets it unchanged; later requests get
    ``name_1``, ``name_2`` and so on.
    """

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._taken: Set[str] = set()

    def sanitize(self, name: str) -> str:
        clean = graphql_name(name)
        count = self._counts.get(clean, 0)
        candidate = clean if count == 0 else f"{clean}_{count}"
        while candidate in self._taken:
            count += 1
            candidate = f"{clean}_{count}"
        self._counts[clean] = count + 1
        self._taken.add(candidate)
        return candidate

    def reserve(self, name: str) -> None:
        """Mark a fixed name as used so sanitized names never collide with it."""
        self._counts.setdefault(name, 1)
        self._taken.add(name)

    def reset(self) -> None:
        self._counts.clear()
        self._taken.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._taken


@dataclass
class BuildContext:
    """State owned by a single schema build."""
    naming: NamingConvention = field(default_factory=lambda: DEFAULT_NAMING)
    registry: TypeNameRegistry = field(default_factory=TypeNameRegistry)

    def __post_init__(self):
        self._reserve_builtins()

    def sanitize(self, name: str) -> str:
        return self.registry.sanitize(name)

    def reset(self) -> None:
        self.registry.reset()
        self._reserve_builtins()

    def _reserve_builtins(self) -> None:
        for name in BUILTIN_TYPE_NAMES:
            self.registry.reserve(name)
