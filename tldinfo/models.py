"""
TLD record model and the open enum-like fields it carries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class TLDType(str, Enum):
    """Well-known TLD classifications. Other registry labels stay plain strings."""

    GTLD = 'gTLD'
    CCTLD = 'ccTLD'
    STLD = 'sTLD'
    INFRASTRUCTURE = 'infrastructure'
    TEST = 'test'

    def __str__(self) -> str:
        return self.value


class TLDStatus(str, Enum):
    """Well-known delegation statuses. Other labels stay plain strings."""

    ACTIVE = 'active'
    RESERVED = 'reserved'
    INACTIVE = 'inactive'
    NOT_ASSIGNED = 'not assigned'

    def __str__(self) -> str:
        return self.value


class IdnSupport(Enum):
    """
    Tri-state IDN support flag.

    UNKNOWN is kept apart from NO so that missing source data is never
    reported as "not supported".
    """

    YES = 'yes'
    NO = 'no'
    UNKNOWN = 'unknown'

    @classmethod
    def from_value(cls, value: Optional[bool]) -> 'IdnSupport':
        if value is None:
            return cls.UNKNOWN
        return cls.YES if value else cls.NO

    def as_bool(self) -> Optional[bool]:
        if self is IdnSupport.UNKNOWN:
            return None
        return self is IdnSupport.YES


TypeLabel = Union[TLDType, str]
StatusLabel = Union[TLDStatus, str]

_TYPES_BY_LABEL = {member.value: member for member in TLDType}
_STATUSES_BY_LABEL = {member.value: member for member in TLDStatus}


def parse_type(label: str) -> TypeLabel:
    """Return the TLDType member for a known label, else the label itself."""
    return _TYPES_BY_LABEL.get(label, label)


def parse_status(label: Optional[str]) -> Optional[StatusLabel]:
    """Return the TLDStatus member for a known label, else the label itself."""
    if label is None:
        return None
    return _STATUSES_BY_LABEL.get(label, label)


@dataclass(frozen=True)
class TLDRecord:
    """
    Metadata for a single top-level domain.

    The `tld` field is the canonical key: leading dot, lowercase.
    """

    tld: str
    type: TypeLabel
    registry: Optional[str] = None
    country_code: Optional[str] = None
    status: Optional[StatusLabel] = None
    created_date: Optional[str] = None
    idn_support: IdnSupport = IdnSupport.UNKNOWN
    has_emoji_flag: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TLDRecord':
        """
        Build a record from a compiled data file entry.

        Args:
            data: Mapping with snake_case keys as written by the compiler

        Returns:
            TLDRecord instance
        """
        created_date = data.get('created_date')
        if created_date is not None:
            # YAML turns unquoted dates and years into date/int objects
            created_date = str(created_date)

        return cls(
            tld=data['tld'],
            type=parse_type(str(data['type'])),
            registry=data.get('registry'),
            country_code=data.get('country_code'),
            status=parse_status(data.get('status')),
            created_date=created_date,
            idn_support=IdnSupport.from_value(data.get('idn_support')),
            has_emoji_flag=bool(data.get('has_emoji_flag', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the data file representation of this record."""
        return {
            'tld': self.tld,
            'type': str(self.type),
            'registry': self.registry,
            'country_code': self.country_code,
            'status': str(self.status) if self.status is not None else None,
            'created_date': self.created_date,
            'idn_support': self.idn_support.as_bool(),
            'has_emoji_flag': self.has_emoji_flag,
        }

    @property
    def is_cctld(self) -> bool:
        return self.type == TLDType.CCTLD
