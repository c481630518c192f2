"""Core SheetQL implementation."""

from pathlib import Path
from typing import Dict, Any, Optional, Mapping, Sequence, Union
import logging

import strawberry

from .schema import NamingConvention, TypeBuilder
from .exceptions import QueryError
from .loader import load_datasets

logger = logging.getLogger(__name__)

Rows = Sequence[Mapping[str, Any]]
Datasets = Mapping[str, Mapping[str, Rows]]


def build_root_schema(datasets: Datasets, naming: Optional[NamingConvention] = None) -> strawberry.Schema:
    """Build a schema with one root field per dataset."""
    return TypeBuilder(naming=naming).build_root_schema(datasets)


def build_dataset_schema(
    name: str,
    dataset: Mapping[str, Rows],
    naming: Optional[NamingConvention] = None
) -> strawberry.Schema:
    """Build a schema whose query root exposes the collections of one dataset."""
    return TypeBuilder(naming=naming).build_dataset_schema(name, dataset)


class SheetQL:
    """Main SheetQL class for creating GraphQL APIs from tabular data."""

    def __init__(self, datasets: Datasets, naming: Optional[NamingConvention] = None):
        """
        Initialize SheetQL and build the schema.

        Args:
            datasets: Mapping of dataset name to its collections of rows
            naming: Naming convention for query fields and relations
        """
        self.datasets = datasets
        self.naming = naming
        self._schema: Optional[strawberry.Schema] = None
        self._build_schema()

    @classmethod
    def from_paths(cls, *paths: Union[str, Path], naming: Optional[NamingConvention] = None) -> "SheetQL":
        """Load files or directories and build a schema over them."""
        return cls(load_datasets(*paths), naming=naming)

    def _build_schema(self) -> None:
        self._schema = build_root_schema(self.datasets, naming=self.naming)

    def rebuild(self, datasets: Optional[Datasets] = None) -> strawberry.Schema:
        """Rebuild the schema, optionally over new datasets."""
        if datasets is not None:
            self.datasets = datasets
        self._build_schema()
        return self._schema

    def get_schema(self) -> strawberry.Schema:
        """Get the generated GraphQL schema."""
        return self._schema

    def print_schema(self) -> str:
        """Schema in GraphQL SDL."""
        return self._schema.as_str()

    def query(self, source: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL query synchronously and return its data."""
        result = self._schema.execute_sync(source, variable_values=variables)
        return self._data(source, result)

    async def execute(self, source: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL query and return its data."""
        result = await self._schema.execute(source, variable_values=variables)
        return self._data(source, result)

    @staticmethod
    def _data(source: str, result) -> Dict[str, Any]:
        if result.errors:
            logger.error(f"Query failed with {len(result.errors)} errors: {result.errors[0]}")
            raise QueryError(
                f"Query failed: {result.errors[0].message}",
                query=source,
                errors=result.errors,
                suggestions=[
                    "Use 'sheetql schema' to list the available fields and arguments",
                ]
            )
        return result.data
