"""
Immutable TLD table and the compiled data file loader.
"""

import logging
import os
import threading
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

import yaml

from .models import TLDRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = os.path.join(os.path.dirname(__file__), 'data', 'tld_data.yaml')


class TLDDataError(Exception):
    """Raised when TLD data or metadata cannot be loaded."""


class TLDTable:
    """
    Read-only collection of TLD records.

    Keeps the records in insertion order for enumeration and search, and a
    mapping from canonical TLD key to record for exact lookups. Both are
    built once here and never change afterwards.
    """

    def __init__(self, records: Iterable[TLDRecord], version: Optional[str] = None):
        """
        Build the table.

        Records are trusted to already be in canonical form; a later record
        with the same key replaces the earlier one in both views.

        Args:
            records: TLD records in enumeration order
            version: Version string of the data source, if known
        """
        index = {}
        for record in records:
            index[record.tld] = record

        self._records: Tuple[TLDRecord, ...] = tuple(index.values())
        self._mapping: Mapping[str, TLDRecord] = MappingProxyType(index)
        self.version = version

    @property
    def records(self) -> Tuple[TLDRecord, ...]:
        return self._records

    @property
    def mapping(self) -> Mapping[str, TLDRecord]:
        return self._mapping

    def get(self, key: str) -> Optional[TLDRecord]:
        return self._mapping.get(key)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TLDRecord]:
        return iter(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping


def load_table(path: str = DEFAULT_DATA_FILE) -> TLDTable:
    """
    Load a TLD table from a compiled YAML data file.

    Args:
        path: Path to the compiled data file

    Returns:
        TLDTable built from the file

    Raises:
        TLDDataError: If the file is missing, unreadable or malformed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise TLDDataError(f"TLD data file not found: {path}") from e
    except (OSError, yaml.YAMLError) as e:
        raise TLDDataError(f"Error reading TLD data file {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get('tlds'), list):
        raise TLDDataError(f"TLD data file {path} has no 'tlds' list")

    try:
        records = [TLDRecord.from_dict(entry) for entry in document['tlds']]
    except (KeyError, TypeError, AttributeError) as e:
        raise TLDDataError(f"Malformed TLD entry in {path}: {e}") from e

    version = document.get('version')
    table = TLDTable(records, version=str(version) if version is not None else None)

    logger.info(f"Loaded {len(table)} TLDs from {path}")
    if table.version:
        logger.info(f"TLD data version: {table.version}")
    return table


_default_table: Optional[TLDTable] = None
_init_lock = threading.Lock()


def initialize_table(path: str = DEFAULT_DATA_FILE) -> TLDTable:
    """
    Load the process-wide table from `path`.

    Meant to run once at startup, before any query is served. Calling it
    again replaces the table with a freshly loaded one.
    """
    global _default_table
    table = load_table(path)
    with _init_lock:
        _default_table = table
    return table


def get_default_table() -> TLDTable:
    """Return the process-wide table, loading the packaged data on first use."""
    global _default_table
    with _init_lock:
        if _default_table is None:
            _default_table = load_table(DEFAULT_DATA_FILE)
        return _default_table
