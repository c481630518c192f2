"""Scalar type inference from sampled column values."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
import logging

from .values import MISSING, is_number, is_truthy, loose_equals, to_number

logger = logging.getLogger(__name__)

# Largest value a GraphQL Int can represent.
MAX_INT = 2 ** 31 - 1

UNKNOWN_TYPE_DESCRIPTION = (
    "Unknown type. Could not infer type from data because all values were empty"
)


class ScalarKind(Enum):
    """Scalar types a column can be inferred as."""
    BOOLEAN = "Boolean"
    INT = "Int"
    STRING = "String"


Coercion = Callable[[Any], Any]


def to_boolean(value: Any) -> bool:
    """Coerce a boolean-like cell: numeric zero is False, anything else by truthiness.

    The string ``"0"`` is therefore True.
    """
    if is_number(value) and value == 0:
        return False
    return is_truthy(value)


@dataclass
class InferredType:
    """Result of inferring a column's scalar type."""
    kind: ScalarKind
    description: str = ""
    coercion: Optional[Coercion] = field(default=None, repr=False)


def is_normal_integer(value: Any) -> bool:
    """Check whether a value is a non-negative integer in canonical form.

    Strings must be plain decimal digits without sign, fraction, exponent
    or leading zeros (``"0"`` itself is fine). Numbers must be integral.
    Either way the value has to fit a GraphQL Int.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 <= value <= MAX_INT
    if isinstance(value, float):
        return value.is_integer() and 0 <= value <= MAX_INT
    if isinstance(value, str):
        if not value.isdigit() or not value.isascii():
            return False
        if len(value) > 1 and value[0] == "0":
            return False
        return int(value) <= MAX_INT
    return False


def sample_values(field_name: str, rows: Sequence[Mapping[str, Any]]) -> List[Any]:
    """Values of a field across rows, dropping falsy ones."""
    values = (row.get(field_name, MISSING) for row in rows)
    return [value for value in values if is_truthy(value)]


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def infer_type(field_name: str, rows: Sequence[Mapping[str, Any]]) -> InferredType:
    """Classify a field as Boolean, Int or String from the rows holding it.

    Falsy values (None, 0, "", False) are treated as absent, so a column
    that is all zeros or all false cannot be recognized and falls back to
    String. Boolean columns come back with a coercion to apply to the
    rows; the rows themselves are left untouched.
    """
    values = sample_values(field_name, rows)

    if not values:
        logger.debug(f"Field '{field_name}': no non-empty values, defaulting to String")
        return InferredType(ScalarKind.STRING, UNKNOWN_TYPE_DESCRIPTION)

    if all(loose_equals(value, 0) or loose_equals(value, 1) for value in values):
        logger.debug(f"Field '{field_name}': inferred Boolean from {len(values)} values")
        return InferredType(ScalarKind.BOOLEAN, "", coercion=to_boolean)

    if all(is_normal_integer(value) for value in values):
        numbers = [to_number(value) for value in values]
        description = (
            f"Min value: {_display(min(numbers))}\n"
            f"Max value: {_display(max(numbers))}"
        )
        logger.debug(f"Field '{field_name}': inferred Int")
        return InferredType(ScalarKind.INT, description)

    examples = "\n".join(_display(value) for value in values[:3])
    logger.debug(f"Field '{field_name}': inferred String")
    return InferredType(ScalarKind.STRING, f"Examples:\n{examples}")


def apply_coercions(
    rows: Sequence[Mapping[str, Any]],
    coercions: Mapping[str, Coercion],
) -> List[Dict[str, Any]]:
    """Return copies of ``rows`` with each field's coercion applied.

    Rows lacking the field get the coerced form of a missing value. The
    input rows are not modified.
    """
    if not coercions:
        return [dict(row) for row in rows]

    coerced = []
    for row in rows:
        copy = dict(row)
        for name, coercion in coercions.items():
            copy[name] = coercion(copy.get(name, MISSING))
        coerced.append(copy)
    return coerced
