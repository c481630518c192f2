"""Schema inference and generation."""

from .inference import InferredType, ScalarKind, apply_coercions, infer_type, is_normal_integer
from .naming import BuildContext, NamingConvention, TypeNameRegistry, DEFAULT_NAMING
from .planner import FieldKind, plan_dataset
from .types import TypeBuilder

__all__ = [
    "InferredType",
    "ScalarKind",
    "apply_coercions",
    "infer_type",
    "is_normal_integer",
    "BuildContext",
    "NamingConvention",
    "TypeNameRegistry",
    "DEFAULT_NAMING",
    "FieldKind",
    "plan_dataset",
    "TypeBuilder",
]
