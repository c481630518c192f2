"""SheetQL - GraphQL schemas inferred from spreadsheet data."""

from .core import SheetQL, build_dataset_schema, build_root_schema
from .loader import load_datasets

__version__ = "0.1.0"
__all__ = ["SheetQL", "build_dataset_schema", "build_root_schema", "load_datasets"]
