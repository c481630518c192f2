"""Second build phase: turn plans into strawberry types and schemas."""

from typing import Annotated, Any, Callable, Dict, List, Mapping, Optional, Sequence, Type
import inspect
import logging

import strawberry
from strawberry.schema.config import StrawberryConfig

from ..exceptions import SchemaError
from .inference import ScalarKind
from .naming import BuildContext, NamingConvention, graphql_name, python_name
from .planner import (
    CollectionPlan,
    DatasetPlan,
    FieldKind,
    FieldPlan,
    plan_collection,
    plan_collections,
    plan_dataset,
)
from .resolvers import find_row, relation_lookup, select_rows

logger = logging.getLogger(__name__)

Rows = Sequence[Mapping[str, Any]]
Lookup = Callable[[str, Any], Any]

ROOT_TYPE_NAME = "root"
NO_DATA = "no data"

SCALAR_TYPES: Dict[FieldKind, Any] = {
    FieldKind.ID: strawberry.ID,
    FieldKind.BOOLEAN: bool,
    FieldKind.INT: int,
    FieldKind.STRING: str,
}

ARGUMENT_TYPES: Dict[ScalarKind, Any] = {
    ScalarKind.INT: int,
    ScalarKind.STRING: str,
}


def schema_config() -> StrawberryConfig:
    """Field and argument names are exposed exactly as planned."""
    return StrawberryConfig(auto_camel_case=False)


def _argument(python_type: Any, name: str) -> Any:
    return Annotated[Optional[python_type], strawberry.argument(name=name)]


def _resolver(func: Callable, parameters: List[inspect.Parameter], return_type: Any) -> Callable:
    """Give ``func`` the signature strawberry reads resolver arguments from."""
    root = inspect.Parameter("root", inspect.Parameter.POSITIONAL_OR_KEYWORD)
    func.__signature__ = inspect.Signature([root, *parameters], return_annotation=return_type)
    func.__annotations__ = {p.name: p.annotation for p in parameters}
    func.__annotations__["return"] = return_type
    return func


def _keyword(name: str, annotation: Any) -> inspect.Parameter:
    return inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=None, annotation=annotation)


def _id_value(value: Any) -> Any:
    """ID only serializes strings and integers."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return int(value) if value.is_integer() else str(value)
    return value


def _object_type(type_name: str, fields: Dict[str, Any], description: Optional[str] = None) -> Type:
    """Create a strawberry object type from named fields."""
    class_dict = {'__annotations__': {}}
    for attr, (graphql_type, strawberry_field) in fields.items():
        class_dict['__annotations__'][attr] = graphql_type
        class_dict[attr] = strawberry_field
    graphql_type = type(type_name, (), class_dict)
    return strawberry.type(graphql_type, name=type_name, description=description)


class TypeBuilder:
    """Builds strawberry types from row collections.

    A builder owns one ``BuildContext``; use a fresh builder (or call
    ``reset``) for each independent build so type names start over.
    """

    def __init__(self, context: Optional[BuildContext] = None, naming: Optional[NamingConvention] = None):
        if context is None:
            context = BuildContext(naming=naming) if naming else BuildContext()
        self.context = context
        self._types: Dict[str, Type] = {}

    @property
    def naming(self) -> NamingConvention:
        return self.context.naming

    def reset(self) -> None:
        """Forget built types and start type naming over."""
        self.context.reset()
        self._types = {}

    def get_type(self, type_name: str) -> Optional[Type]:
        return self._types.get(type_name)

    # Object fields

    def _scalar_field(self, plan: FieldPlan):
        source = plan.source
        graphql_type = Optional[SCALAR_TYPES[plan.kind]]

        if plan.kind is FieldKind.INT:
            def resolve(root):
                value = root.get(source)
                return None if value == "" else value
        elif plan.kind is FieldKind.ID:
            def resolve(root):
                return _id_value(root.get(source))
        else:
            def resolve(root):
                return root.get(source)

        return graphql_type, strawberry.field(
            resolver=resolve,
            name=plan.name,
            graphql_type=graphql_type,
            description=plan.description or None,
        )

    def _relation_field(self, plan: FieldPlan, related_type: Type, lookup: Lookup):
        source, target = plan.source, plan.target
        graphql_type = Optional[related_type]

        def resolve(root):
            return lookup(target, root.get(source))

        return graphql_type, strawberry.field(
            resolver=resolve,
            name=plan.name,
            graphql_type=graphql_type,
            description=plan.description or None,
        )

    def _collection_type(self, plan: CollectionPlan, related_types: Mapping[str, Type], lookup: Lookup) -> Type:
        fields = {}
        for field_plan in plan.fields:
            if field_plan.kind is FieldKind.RELATION:
                fields[field_plan.python_name] = self._relation_field(
                    field_plan, related_types[field_plan.target], lookup
                )
            else:
                fields[field_plan.python_name] = self._scalar_field(field_plan)
        graphql_type = _object_type(plan.type_name, fields)
        self._types[plan.type_name] = graphql_type
        return graphql_type

    def build_collection_type(
        self,
        name: str,
        rows: Rows,
        related_types: Mapping[str, Type],
        lookup: Lookup,
    ) -> Type:
        """Build the object type of one collection.

        Fields come from the first row. Columns ending in ``Id`` whose
        target is in ``related_types`` become relation fields resolved
        through ``lookup(target, value)``. The rows served to this type
        must already be coerced (see ``plan_collection``).
        """
        plan = plan_collection(name, rows, set(related_types), self.context)
        return self._collection_type(plan, related_types, lookup)

    # Query fields

    def _singular_field(self, plan: CollectionPlan, graphql_type: Type):
        rows = plan.rows
        criteria = [(argument.python_name, argument.source) for argument in plan.arguments]

        def resolve(root, row=None, **arguments):
            return find_row(rows, row, [(source, arguments.get(name)) for name, source in criteria])

        parameters = [_keyword("row", _argument(int, "row"))]
        for argument in plan.arguments:
            parameters.append(
                _keyword(argument.python_name, _argument(ARGUMENT_TYPES[argument.kind], argument.name))
            )
        return_type = Optional[graphql_type]
        return return_type, strawberry.field(
            resolver=_resolver(resolve, parameters, return_type),
            name=plan.singular_name,
            graphql_type=return_type,
            description=plan.description,
        )

    def _plural_field(self, plan: CollectionPlan, graphql_type: Type):
        rows = plan.rows

        def resolve(root, limit=None, offset=None, sort=None, sort_desc=None):
            return select_rows(rows, limit=limit, offset=offset, sort=sort, sort_desc=sort_desc)

        parameters = [
            _keyword("limit", _argument(int, "limit")),
            _keyword("offset", _argument(int, "offset")),
            _keyword("sort", _argument(str, "sort")),
            _keyword("sort_desc", _argument(str, "sortDesc")),
        ]
        return_type = Optional[List[Optional[graphql_type]]]
        return return_type, strawberry.field(
            resolver=_resolver(resolve, parameters, return_type),
            name=plan.plural_name,
            graphql_type=return_type,
        )

    def _query_fields(self, plan: DatasetPlan) -> Dict[str, Any]:
        lookup = relation_lookup(plan.views, self.naming)
        related_types: Dict[str, Type] = {}
        by_name: Dict[str, Any] = {}
        for collection in plan.collections:
            graphql_type = self._collection_type(collection, related_types, lookup)
            related_types[collection.normalized_name] = graphql_type
            by_name[collection.singular_name] = self._singular_field(collection, graphql_type)
            by_name[collection.plural_name] = self._plural_field(collection, graphql_type)

        fields: Dict[str, Any] = {}
        for name, field in by_name.items():
            fields[python_name(name, fields)] = field
        return fields

    def build_collection_query_fields(self, dataset: Mapping[str, Rows]) -> Dict[str, Any]:
        """Build a singular and a plural query field per collection.

        Returns ``(graphql_type, strawberry_field)`` pairs keyed by Python
        attribute name, ready to be placed on an object type.
        """
        return self._query_fields(plan_collections(dataset, self.context))

    def _dataset_type(self, plan: DatasetPlan) -> Type:
        fields = self._query_fields(plan)
        if not fields:
            fields = {"no_data": self._no_data_field()}
        graphql_type = _object_type(plan.type_name, fields, plan.description)
        self._types[plan.type_name] = graphql_type
        return graphql_type

    def build_dataset_type(self, name: str, dataset: Mapping[str, Rows]) -> Type:
        """Object type exposing every collection of a dataset."""
        return self._dataset_type(plan_dataset(name, dataset, self.context))

    def build_dataset_schema(self, name: str, dataset: Mapping[str, Rows]) -> strawberry.Schema:
        """Stand-alone schema whose query root is the dataset's type."""
        return self._schema(self.build_dataset_type(name, dataset), dataset_name=name)

    # Root

    @staticmethod
    def _no_data_field():
        def resolve(root) -> str:
            return NO_DATA

        return Optional[str], strawberry.field(
            resolver=resolve, name="no_data", graphql_type=Optional[str], description="No API yet"
        )

    def build_root_schema(self, datasets: Mapping[str, Mapping[str, Rows]]) -> strawberry.Schema:
        """Schema exposing one root field per dataset.

        Type naming starts over on every call.
        """
        self.reset()
        self.context.registry.reserve(ROOT_TYPE_NAME)

        fields: Dict[str, Any] = {}
        for name, dataset in datasets.items():
            plan = plan_dataset(name, dataset, self.context)
            graphql_type = self._dataset_type(plan)
            fields[python_name(name, fields)] = self._dataset_field(name, plan, graphql_type)

        if not fields:
            logger.warning("No datasets to expose; schema only has the no_data field")
            fields = {"no_data": self._no_data_field()}

        root = _object_type(ROOT_TYPE_NAME, fields)
        logger.info(f"Built schema with {len(datasets)} datasets and {len(self._types)} types")
        return self._schema(root)

    @staticmethod
    def _dataset_field(name: str, plan: DatasetPlan, graphql_type: Type):
        views = plan.views

        def resolve(root):
            return views

        return Optional[graphql_type], strawberry.field(
            resolver=resolve, name=graphql_name(name), graphql_type=Optional[graphql_type]
        )

    @staticmethod
    def _schema(query: Type, dataset_name: Optional[str] = None) -> strawberry.Schema:
        try:
            return strawberry.Schema(query=query, config=schema_config())
        except Exception as e:
            logger.error(f"Failed to assemble schema: {e}")
            raise SchemaError(
                f"Could not assemble GraphQL schema: {e}",
                dataset_name=dataset_name,
                suggestions=[
                    "Check for collection or column names that collide after sanitization",
                ],
            ) from e
