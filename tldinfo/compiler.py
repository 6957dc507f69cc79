"""
Compiles the TLD data file from the IANA TLD list plus a metadata file.

The IANA list (https://data.iana.org/TLD/tlds-alpha-by-domain.txt) only
names the delegated TLDs. Registry, status, dates and type overrides come
from a YAML metadata file keyed by TLD label; anything it does not cover is
inferred from the label itself.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests
import yaml

from .models import IdnSupport, TLDRecord, TLDStatus, TLDType, parse_status, parse_type
from .normalizer import normalize_tld
from .query import country_code_to_flag
from .table import TLDDataError

logger = logging.getLogger(__name__)

IANA_TLD_URL = "https://data.iana.org/TLD/tlds-alpha-by-domain.txt"

# Special-use names reserved by RFC 2606 / RFC 6761
RESERVED_TEST_LABELS = {'test', 'example', 'invalid', 'localhost'}


def parse_iana_list(content: str) -> Tuple[Optional[str], List[str]]:
    """
    Parse TLD list content from IANA format.

    Format:
    # Version 2025112300, Last Updated Sun Nov 23 07:07:02 2025 UTC
    AAA
    AARP
    ABB
    ...

    Args:
        content: TLD list content

    Returns:
        Tuple of (version_line, lowercase labels in file order)
    """
    version = None
    labels: List[str] = []
    seen = set()

    for line in content.split('\n'):
        line = line.strip()

        if not line:
            continue

        if line.startswith('#'):
            if 'Version' in line and version is None:
                version = line.lstrip('#').strip()
            continue

        # IANA list is uppercase
        label = line.lower()
        if label not in seen:
            seen.add(label)
            labels.append(label)

    return version, labels


def read_iana_list(path: str) -> Tuple[Optional[str], List[str]]:
    """Read and parse an IANA TLD list file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise TLDDataError(f"Error reading IANA TLD list {path}: {e}") from e

    version, labels = parse_iana_list(content)
    logger.info(f"Read {len(labels)} TLDs from {path}")
    if version:
        logger.info(f"TLD list version: {version}")
    return version, labels


def fetch_iana_list(cache_file: str, url: str = IANA_TLD_URL, timeout: int = 10) -> str:
    """
    Download a fresh IANA TLD list and store it in `cache_file`.

    Falls back to the cached copy when the download fails.

    Args:
        cache_file: Where to keep the downloaded list
        url: IANA list URL
        timeout: Request timeout in seconds

    Returns:
        Path of the list file to compile from

    Raises:
        TLDDataError: If the download fails and no cached copy exists
    """
    try:
        logger.info(f"Downloading fresh TLD list from {url}")

        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        cache_dir = os.path.dirname(cache_file)
        if cache_dir:
            os.makedirs(cache_dir, exist_ok=True)
        with open(cache_file, 'w', encoding='utf-8') as f:
            f.write(response.text)

        logger.info(f"TLD list downloaded successfully to {cache_file}")
        return cache_file

    except requests.RequestException as e:
        logger.error(f"Failed to download TLD list from {url}: {e}")
        if os.path.exists(cache_file):
            logger.info(f"Falling back to cached TLD list: {cache_file}")
            return cache_file
        raise TLDDataError(f"TLD list download failed and no cache at {cache_file}") from e


def load_metadata(path: Optional[str]) -> Dict[str, Dict[str, Any]]:
    """
    Load per-TLD metadata overrides.

    Args:
        path: YAML file mapping TLD labels ('com' or '.com') to field values,
            or None for no metadata

    Returns:
        Mapping of canonical TLD key to field overrides
    """
    if not path:
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"TLD metadata file not found: {path}")
        return {}
    except (OSError, yaml.YAMLError) as e:
        raise TLDDataError(f"Error loading TLD metadata {path}: {e}") from e

    if not isinstance(document, dict):
        raise TLDDataError(f"TLD metadata {path} must be a mapping of TLD to fields")

    metadata = {normalize_tld(str(label)): fields or {} for label, fields in document.items()}
    logger.info(f"Loaded metadata for {len(metadata)} TLDs from {path}")
    return metadata


class TLDDataCompiler:
    """
    Turns TLD labels plus metadata overrides into TLD records.
    """

    def __init__(self, metadata: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Initialize compiler.

        Args:
            metadata: Canonical TLD key -> field overrides (see load_metadata)
        """
        self.metadata = metadata or {}

    def compile(self, labels: Iterable[str]) -> List[TLDRecord]:
        """
        Compile records for the given TLD labels, keeping their order.

        Args:
            labels: TLD labels, with or without leading dot

        Returns:
            List of TLDRecord
        """
        records = [self.compile_one(label) for label in labels]
        logger.info(f"Compiled {len(records)} TLD records")
        return records

    def compile_one(self, label: str) -> TLDRecord:
        key = normalize_tld(label)
        overrides = self.metadata.get(key, {})
        name = key.lstrip('.')

        tld_type, country_code, status = self._infer(name)
        if 'type' in overrides:
            tld_type = parse_type(str(overrides['type']))
        if 'country_code' in overrides:
            country_code = overrides['country_code']
            country_code = country_code.upper() if country_code else None
        if 'status' in overrides:
            status = parse_status(overrides['status'])

        created_date = overrides.get('created_date')
        has_flag = tld_type == TLDType.CCTLD and country_code_to_flag(country_code) is not None

        return TLDRecord(
            tld=key,
            type=tld_type,
            registry=overrides.get('registry'),
            country_code=country_code,
            status=status,
            created_date=str(created_date) if created_date is not None else None,
            idn_support=IdnSupport.from_value(overrides.get('idn_support')),
            has_emoji_flag=has_flag,
        )

    @staticmethod
    def _infer(name: str):
        if len(name) == 2 and name.isascii() and name.isalpha():
            return TLDType.CCTLD, name.upper(), TLDStatus.ACTIVE
        if name == 'arpa':
            return TLDType.INFRASTRUCTURE, None, TLDStatus.ACTIVE
        if name in RESERVED_TEST_LABELS:
            return TLDType.TEST, None, TLDStatus.RESERVED
        return TLDType.GTLD, None, TLDStatus.ACTIVE


def write_data_file(records: Iterable[TLDRecord], path: str, version: Optional[str] = None) -> int:
    """
    Write compiled records as a YAML data file.

    Args:
        records: Records to write, in table order
        path: Output file path
        version: Source list version, stored in the file header

    Returns:
        Number of records written
    """
    entries = [record.to_dict() for record in records]
    document = {
        'version': version,
        'generated': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
        'tlds': entries,
    }

    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(document, f, allow_unicode=True, sort_keys=False)

    logger.info(f"Wrote {len(entries)} TLD records to {path}")
    return len(entries)
