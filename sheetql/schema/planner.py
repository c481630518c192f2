"""First build phase: derive plain-data descriptors from row collections.

Nothing here touches strawberry. The planner decides every field, argument
and type name up front, and derives the coerced row view each collection
is served from, so that the type construction phase only has to translate
descriptors into GraphQL types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set
import logging

from .inference import Coercion, ScalarKind, apply_coercions, infer_type, is_normal_integer
from .naming import BuildContext, graphql_name, python_name

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

# Parameter names strawberry treats specially on resolvers.
RESERVED_PARAMETERS = frozenset({"self", "root", "info", "parent", "row"})


class FieldKind(Enum):
    """Semantic type of a generated object field."""
    ID = "ID"
    BOOLEAN = "Boolean"
    INT = "Int"
    STRING = "String"
    RELATION = "Relation"

    @classmethod
    def from_scalar(cls, kind: ScalarKind) -> "FieldKind":
        return cls(kind.value)


@dataclass
class FieldPlan:
    """An object field: exposed ``name`` reading ``source`` from each row."""
    name: str
    source: str
    kind: FieldKind
    description: str = ""
    target: Optional[str] = None
    python_name: str = ""
    coercion: Optional[Coercion] = field(default=None, repr=False, compare=False)


@dataclass
class ArgumentPlan:
    """A lookup argument on a singular query field."""
    name: str
    source: str
    kind: ScalarKind
    python_name: str = ""


@dataclass
class CollectionPlan:
    """Everything needed to expose one collection."""
    collection_name: str
    normalized_name: str
    singular_name: str
    plural_name: str
    type_name: str
    fields: List[FieldPlan]
    arguments: List[ArgumentPlan]
    rows: List[Row] = field(repr=False, default_factory=list)

    @property
    def description(self) -> str:
        return f"{self.collection_name} sheet"


@dataclass
class DatasetPlan:
    """Collections of one dataset in build order, plus their coerced rows."""
    name: str
    type_name: Optional[str]
    collections: List[CollectionPlan]
    views: Dict[str, List[Row]] = field(repr=False, default_factory=dict)

    @property
    def description(self) -> str:
        return f"File {self.name}"


def plan_fields(
    rows: Sequence[Mapping[str, Any]],
    related: Set[str],
    context: BuildContext,
) -> List[FieldPlan]:
    """Describe the fields of a collection from the keys of its first row.

    Only plain scalar fields carry a coercion. ``id`` and resolved
    relation columns deliberately keep their raw values even when they
    infer as Boolean, so a key column holding only ``1`` is never turned
    into ``true`` and still matches the ids it points at.
    """
    fields: Dict[str, FieldPlan] = {}
    for source in rows[0]:
        inferred = infer_type(source, rows)
        target = context.naming.relation_target(source)
        if source == "id":
            plan = FieldPlan("id", source, FieldKind.ID, inferred.description)
        elif target is not None and target in related:
            plan = FieldPlan(
                graphql_name(target), source, FieldKind.RELATION,
                inferred.description, target=target,
            )
        else:
            if target is not None:
                logger.warning(
                    f"Field '{source}' looks like a reference to '{target}', "
                    f"but no such collection was built before it; exposing it as a scalar"
                )
            plan = FieldPlan(
                graphql_name(source), source, FieldKind.from_scalar(inferred.kind),
                inferred.description, coercion=inferred.coercion,
            )
        fields[plan.name] = plan

    taken: Set[str] = set()
    for plan in fields.values():
        plan.python_name = python_name(plan.name, taken)
        taken.add(plan.python_name)
    return list(fields.values())


def plan_arguments(first_row: Mapping[str, Any]) -> List[ArgumentPlan]:
    """Describe the lookup arguments of a singular query field.

    Each key of the first row becomes an argument, typed Int when the
    first row holds a normal integer there and String otherwise. A key
    named ``row`` is skipped since that argument selects by index.
    """
    arguments: Dict[str, ArgumentPlan] = {}
    taken = set(RESERVED_PARAMETERS)
    for source, value in first_row.items():
        name = graphql_name(source)
        if name == "row" or name in arguments:
            continue
        kind = ScalarKind.INT if is_normal_integer(value) else ScalarKind.STRING
        argument = ArgumentPlan(name, source, kind, python_name(name, taken))
        taken.add(argument.python_name)
        arguments[name] = argument
    return list(arguments.values())


def plan_collection(
    collection_name: str,
    rows: Sequence[Mapping[str, Any]],
    related: Set[str],
    context: BuildContext,
) -> CollectionPlan:
    """Plan a single, non-empty collection.

    ``related`` holds the normalized names of collections already built,
    the only ones relation fields may point at.
    """
    naming = context.naming
    normalized = naming.singular(collection_name)
    type_name = context.sanitize(normalized)
    fields = plan_fields(rows, related, context)

    coercions = {plan.source: plan.coercion for plan in fields if plan.coercion}

    singular = graphql_name(normalized)
    return CollectionPlan(
        collection_name=collection_name,
        normalized_name=normalized,
        singular_name=singular,
        plural_name=naming.plural(singular),
        type_name=type_name,
        fields=fields,
        arguments=plan_arguments(rows[0]),
        rows=apply_coercions(rows, coercions),
    )


def plan_collections(
    dataset: Mapping[str, Sequence[Mapping[str, Any]]],
    context: BuildContext,
) -> DatasetPlan:
    """Plan every collection of a dataset, in reverse declaration order.

    Reverse order is what lets a collection declared early reference one
    declared after it. Collections without rows or columns are skipped but
    stay reachable for relation lookups.
    """
    collections: List[CollectionPlan] = []
    views: Dict[str, List[Row]] = {}
    related: Set[str] = set()

    for collection_name in reversed(list(dataset)):
        rows = dataset[collection_name]
        if not rows or not rows[0]:
            logger.warning(f"Collection '{collection_name}' has no rows or no columns; skipping it")
            views[collection_name] = [dict(row) for row in rows]
            continue
        plan = plan_collection(collection_name, rows, related, context)
        views[collection_name] = plan.rows
        related.add(plan.normalized_name)
        collections.append(plan)

    views = {name: views[name] for name in dataset}
    return DatasetPlan(name="", type_name=None, collections=collections, views=views)


def plan_dataset(
    name: str,
    dataset: Mapping[str, Sequence[Mapping[str, Any]]],
    context: BuildContext,
) -> DatasetPlan:
    """Plan a dataset and name its object type after its collections are named."""
    plan = plan_collections(dataset, context)
    plan.name = name
    plan.type_name = context.sanitize(name)
    logger.debug(
        f"Planned dataset '{name}' as type '{plan.type_name}' "
        f"with {len(plan.collections)} collections"
    )
    return plan
