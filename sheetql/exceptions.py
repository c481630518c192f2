"""Custom exceptions for SheetQL with enhanced error messages."""

from typing import Optional, Dict, Any, List
import uuid


class SheetQLError(Exception):
    """Base class for errors raised while loading data, building or querying.

    ``context`` names the dataset, collection, file or query involved, and
    ``suggestions`` lists fixes shown by the CLI. Every error gets a
    correlation id so a CLI report can be matched to the log lines.
    """

    default_code = "SHEETQL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        correlation_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.context = context or {}
        self.suggestions = suggestions or []
        self.correlation_id = correlation_id or str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form, keyed the way the CLI reports errors."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
            "suggestions": self.suggestions,
            "correlation_id": self.correlation_id
        }

    def __str__(self) -> str:
        lines = [f"[{self.error_code}] {self.message}"]
        if self.context:
            lines.append(f"Context: {self.context}")
        if self.suggestions:
            lines.append("Suggestions:")
            lines.extend(f"  {n}. {text}" for n, text in enumerate(self.suggestions, 1))
        lines.append(f"Correlation ID: {self.correlation_id}")
        return "\n".join(lines)


class SchemaError(SheetQLError):
    """Generated types were rejected while assembling the GraphQL schema."""

    def __init__(
        self,
        message: str,
        dataset_name: Optional[str] = None,
        collection_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop("context", {})
        if dataset_name:
            context["dataset"] = dataset_name
        if collection_name:
            context["collection"] = collection_name

        super().__init__(
            message=message,
            error_code="SCHEMA_ERROR",
            context=context,
            **kwargs
        )


class QueryError(SheetQLError):
    """Error during query execution."""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        errors: Optional[List[Any]] = None,
        **kwargs
    ):
        context = kwargs.pop("context", {})
        if query:
            # Truncate long queries
            context["query"] = query[:200] + "..." if len(query) > 200 else query
        if errors:
            context["errors"] = [str(error) for error in errors]

        super().__init__(
            message=message,
            error_code="QUERY_ERROR",
            context=context,
            **kwargs
        )


class LoaderError(SheetQLError):
    """Source files could not be turned into row collections."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path

        suggestions = kwargs.pop("suggestions", [])
        if not suggestions:
            suggestions = [
                "Check that the file exists and is readable",
                "Supported formats are .csv, .tsv and .json",
            ]

        super().__init__(
            message=message,
            error_code="LOADER_ERROR",
            context=context,
            suggestions=suggestions,
            **kwargs
        )
