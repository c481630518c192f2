"""Load spreadsheet-like files into row collections."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Union
import json
import logging

import duckdb

from .exceptions import LoaderError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Dataset = Dict[str, List[Row]]

SUPPORTED_SUFFIXES = ('.csv', '.tsv', '.json')


def read_delimited(path: Path) -> List[Row]:
    """Read a CSV or TSV file as text cells; blank cells become None."""
    delimiter = '\t' if path.suffix.lower() == '.tsv' else ','
    conn = duckdb.connect(':memory:')
    try:
        relation = conn.read_csv(str(path), header=True, sep=delimiter, all_varchar=True)
        columns = relation.columns
        return [dict(zip(columns, values)) for values in relation.fetchall()]
    except duckdb.Error as e:
        raise LoaderError(f"Could not read {path.name}: {e}", path=str(path)) from e
    finally:
        conn.close()


def read_json(path: Path) -> Dataset:
    """Read a JSON file holding either ``{collection: [rows]}`` or a bare ``[rows]``."""
    try:
        with path.open(encoding='utf-8') as handle:
            document = json.load(handle)
    except (OSError, json.JSONDecodeError) as e:
        raise LoaderError(f"Could not parse {path.name}: {e}", path=str(path)) from e

    if isinstance(document, list):
        document = {path.stem: document}
    if not isinstance(document, dict):
        raise LoaderError(
            f"{path.name} must hold an object of collections or an array of rows",
            path=str(path)
        )

    dataset = {}
    for name, rows in document.items():
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise LoaderError(
                f"Collection '{name}' in {path.name} is not an array of objects",
                path=str(path),
                context={"collection": name}
            )
        dataset[name] = rows
    return dataset


def load_file(path: Union[str, Path]) -> Dataset:
    """Load one file into a dataset."""
    path = Path(path)
    if not path.is_file():
        raise LoaderError(f"File not found: {path}", path=str(path))

    suffix = path.suffix.lower()
    if suffix in ('.csv', '.tsv'):
        dataset = {path.stem: read_delimited(path)}
    elif suffix == '.json':
        dataset = read_json(path)
    else:
        raise LoaderError(f"Unsupported file type '{suffix}'", path=str(path))

    logger.info(f"Loaded {path.name}: {', '.join(f'{k} ({len(v)} rows)' for k, v in dataset.items())}")
    return dataset


def _expand(paths: Iterable[Union[str, Path]]) -> List[Path]:
    files = []
    for path in map(Path, paths):
        if path.is_dir():
            files.extend(
                child for child in sorted(path.iterdir())
                if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES
            )
        elif path.exists():
            files.append(path)
        else:
            raise LoaderError(f"Path not found: {path}", path=str(path))
    return files


def load_datasets(*paths: Union[str, Path]) -> Dict[str, Dataset]:
    """Load files and directories into datasets keyed by file name.

    Directories contribute their supported files, in name order, without
    descending into subdirectories.
    """
    datasets = {}
    for path in _expand(paths):
        if path.name in datasets:
            logger.warning(f"Duplicate file name {path.name}; keeping the first one")
            continue
        datasets[path.name] = load_file(path)
    return datasets
