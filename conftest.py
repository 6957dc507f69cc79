"""
Shared fixtures: a small seed table mirroring the bundled data for .com,
.ai, .de and .test.
"""

import pytest

import tldinfo.table
from tldinfo import IdnSupport, TLDQueryEngine, TLDRecord, TLDStatus, TLDTable, TLDType


COM = TLDRecord(
    tld='.com',
    type=TLDType.GTLD,
    registry='VeriSign Global Registry Services',
    country_code=None,
    status=TLDStatus.ACTIVE,
    created_date='1985-01-01',
    idn_support=IdnSupport.YES,
    has_emoji_flag=False,
)

AI = TLDRecord(
    tld='.ai',
    type=TLDType.CCTLD,
    registry='Government of Anguilla',
    country_code='AI',
    status=TLDStatus.ACTIVE,
    created_date='1995-02-16',
    idn_support=IdnSupport.NO,
    has_emoji_flag=True,
)

DE = TLDRecord(
    tld='.de',
    type=TLDType.CCTLD,
    registry='DENIC eG',
    country_code='DE',
    status=TLDStatus.ACTIVE,
    created_date='1986-11-05',
    idn_support=IdnSupport.YES,
    has_emoji_flag=True,
)

TEST = TLDRecord(
    tld='.test',
    type=TLDType.TEST,
    registry='Internet Assigned Numbers Authority',
    country_code=None,
    status=TLDStatus.RESERVED,
    created_date='1999-06-11',
    idn_support=IdnSupport.UNKNOWN,
    has_emoji_flag=False,
)

SEED_RECORDS = [COM, AI, DE, TEST]


@pytest.fixture
def seed_table():
    return TLDTable(SEED_RECORDS, version='test-seed')


@pytest.fixture
def engine(seed_table):
    return TLDQueryEngine(seed_table)


@pytest.fixture(autouse=True)
def reset_default_table():
    # The CLI initializes the process-wide table; keep tests independent
    yield
    tldinfo.table._default_table = None
