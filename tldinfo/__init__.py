"""
TLD metadata lookup, validation and search.
"""

from .models import IdnSupport, TLDRecord, TLDStatus, TLDType, parse_status, parse_type
from .normalizer import extract_tld, normalize_tld
from .table import TLDDataError, TLDTable, get_default_table, initialize_table, load_table
from .query import (
    TLDQueryEngine,
    country_code_to_flag,
    get_country_tlds,
    get_emoji_for_tld,
    get_tld_info,
    get_tlds_by_type,
    is_valid_tld,
    search_tld,
    tld_info_list,
    tld_info_map,
    tld_list,
)

__version__ = '1.0.0'

__all__ = [
    'IdnSupport',
    'TLDRecord',
    'TLDStatus',
    'TLDType',
    'parse_status',
    'parse_type',
    'extract_tld',
    'normalize_tld',
    'TLDDataError',
    'TLDTable',
    'get_default_table',
    'initialize_table',
    'load_table',
    'TLDQueryEngine',
    'country_code_to_flag',
    'get_country_tlds',
    'get_emoji_for_tld',
    'get_tld_info',
    'get_tlds_by_type',
    'is_valid_tld',
    'search_tld',
    'tld_info_list',
    'tld_info_map',
    'tld_list',
]
