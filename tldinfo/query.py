"""
Read-only queries over a TLD table: lookup, validation, filtering, search
and emoji flag derivation.
"""

import logging
from typing import List, Mapping, Optional, Tuple

from .models import TLDRecord, TLDType
from .normalizer import normalize_tld
from .table import TLDTable, get_default_table

logger = logging.getLogger(__name__)

# Offset between uppercase ASCII letters and regional indicator symbols
# (0x1F1E6 - ord('A')).
REGIONAL_INDICATOR_OFFSET = 127397


def country_code_to_flag(country_code: Optional[str]) -> Optional[str]:
    """
    Build a flag emoji from an ISO 3166-1 alpha-2 country code.

    Args:
        country_code: Two-letter country code (e.g., 'US', 'de')

    Returns:
        Pair of regional indicator symbols, or None if the code is not
        exactly two ASCII letters
    """
    if not country_code or len(country_code) != 2:
        return None

    code = country_code.upper()
    if len(code) != 2 or not all('A' <= char <= 'Z' for char in code):
        return None

    return ''.join(chr(ord(char) + REGIONAL_INDICATOR_OFFSET) for char in code)


class TLDQueryEngine:
    """
    Query operations over an immutable TLDTable.

    None of the methods raise for missing or invalid input: no match is
    reported as None or an empty list.
    """

    def __init__(self, table: TLDTable):
        """
        Initialize query engine.

        Args:
            table: Loaded TLDTable to query
        """
        self.table = table

    @property
    def mapping(self) -> Mapping[str, TLDRecord]:
        return self.table.mapping

    def list_all(self) -> Tuple[TLDRecord, ...]:
        return self.table.records

    def lookup(self, value: str) -> Optional[TLDRecord]:
        """
        Get the record for a TLD string.

        Args:
            value: TLD string (case-insensitive, with or without leading dot)

        Returns:
            TLDRecord or None if not found
        """
        if not value or not value.strip():
            return None
        return self.table.get(normalize_tld(value))

    def is_valid(self, value: str) -> bool:
        """Check if a TLD string exists in the table."""
        return self.lookup(value) is not None

    def filter_by_type(self, tld_type: str) -> List[TLDRecord]:
        """
        Get all records of a TLD type.

        Args:
            tld_type: Type label, compared case-insensitively (e.g., 'cctld')

        Returns:
            Matching records in table order
        """
        if not tld_type or not tld_type.strip():
            return []

        wanted = tld_type.lower()
        return [record for record in self.table if str(record.type).lower() == wanted]

    def filter_by_country(self, country_code: str) -> List[TLDRecord]:
        """
        Get the ccTLDs delegated for a country.

        Records of any other type are skipped even if they carry a country
        code.

        Args:
            country_code: ISO 3166-1 alpha-2 code (case-insensitive)

        Returns:
            Matching ccTLD records in table order
        """
        if not country_code or not country_code.strip():
            return []

        wanted = country_code.upper()
        return [
            record for record in self.table
            if record.type == TLDType.CCTLD
            and record.country_code is not None
            and record.country_code.upper() == wanted
        ]

    def emoji_flag(self, value: str) -> Optional[str]:
        """
        Get the flag emoji for a ccTLD.

        Args:
            value: ccTLD string (case-insensitive, with or without leading dot)

        Returns:
            Flag emoji, or None if the TLD is unknown, not a ccTLD, or has no
            derivable flag
        """
        record = self.lookup(value)
        if record is None or record.type != TLDType.CCTLD or not record.has_emoji_flag:
            return None
        return country_code_to_flag(record.country_code)

    def search(self, query: str, limit: Optional[int] = None) -> List[TLDRecord]:
        """
        Substring search over TLD string, registry and country code.

        Records are scanned in table order and each one is included at most
        once. With a positive `limit`, scanning stops at the limit, so the
        result is the first matches in table order, not a ranking.

        Args:
            query: Search text (case-insensitive)
            limit: Maximum number of results; None, 0 or negative for no limit

        Returns:
            Matching records
        """
        if not query or not query.strip():
            return []

        needle = query.lower()
        results: List[TLDRecord] = []
        for record in self.table:
            fields = (record.tld, record.registry, record.country_code)
            if any(field and needle in field.lower() for field in fields):
                results.append(record)
                if limit and limit > 0 and len(results) >= limit:
                    break

        logger.debug(f"Search '{query}' matched {len(results)} TLDs")
        return results


def _default_engine() -> TLDQueryEngine:
    return TLDQueryEngine(get_default_table())


def get_tld_info(value: str) -> Optional[TLDRecord]:
    return _default_engine().lookup(value)


def is_valid_tld(value: str) -> bool:
    return _default_engine().is_valid(value)


def get_tlds_by_type(tld_type: str) -> List[TLDRecord]:
    return _default_engine().filter_by_type(tld_type)


def get_country_tlds(country_code: str) -> List[TLDRecord]:
    return _default_engine().filter_by_country(country_code)


def get_emoji_for_tld(value: str) -> Optional[str]:
    return _default_engine().emoji_flag(value)


def search_tld(query: str, limit: Optional[int] = None) -> List[TLDRecord]:
    return _default_engine().search(query, limit=limit)


def tld_info_list() -> Tuple[TLDRecord, ...]:
    return get_default_table().records


def tld_info_map() -> Mapping[str, TLDRecord]:
    return get_default_table().mapping


def tld_list() -> List[str]:
    return [record.tld for record in get_default_table()]
