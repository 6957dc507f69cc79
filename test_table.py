"""
Tests for the TLD table, the record model and the compiled data loader.
"""

import datetime

import pytest
import yaml

from conftest import AI, COM, DE, SEED_RECORDS
from tldinfo import (
    IdnSupport,
    TLDDataError,
    TLDRecord,
    TLDStatus,
    TLDTable,
    TLDType,
    country_code_to_flag,
    get_default_table,
    load_table,
    parse_status,
    parse_type,
)


def _write_data(path, entries, version='Version 1'):
    path.write_text(yaml.safe_dump({'version': version, 'tlds': entries}), encoding='utf-8')
    return str(path)


def test_table_views_hold_same_records(seed_table):
    assert seed_table.records == tuple(SEED_RECORDS)
    assert set(seed_table.mapping.values()) == set(seed_table.records)
    for key, record in seed_table.mapping.items():
        assert key == record.tld


def test_table_is_read_only(seed_table):
    with pytest.raises(TypeError):
        seed_table.mapping['.xyz'] = COM
    with pytest.raises(AttributeError):
        seed_table.records.append(COM)


def test_table_does_not_share_caller_list():
    records = [COM, AI]
    table = TLDTable(records)
    records.append(DE)
    assert len(table) == 2
    assert '.de' not in table


def test_table_container_protocol(seed_table):
    assert len(seed_table) == 4
    assert '.ai' in seed_table
    assert 'ai' not in seed_table
    assert seed_table.get('.de') == DE
    assert seed_table.get('.nope') is None
    assert list(seed_table) == SEED_RECORDS


def test_records_are_frozen():
    with pytest.raises(AttributeError):
        COM.registry = 'Someone else'


def test_open_enums_keep_unknown_labels():
    assert parse_type('ccTLD') is TLDType.CCTLD
    assert parse_type('generic-restricted') == 'generic-restricted'
    assert parse_status('not assigned') is TLDStatus.NOT_ASSIGNED
    assert parse_status('retired') == 'retired'
    assert parse_status(None) is None
    assert str(TLDType.GTLD) == 'gTLD'
    assert f"{TLDStatus.ACTIVE}" == 'active'


def test_idn_support_tri_state():
    assert IdnSupport.from_value(True) is IdnSupport.YES
    assert IdnSupport.from_value(False) is IdnSupport.NO
    assert IdnSupport.from_value(None) is IdnSupport.UNKNOWN
    assert IdnSupport.UNKNOWN.as_bool() is None
    assert IdnSupport.NO.as_bool() is False


def test_record_dict_conversion():
    data = AI.to_dict()
    assert data['type'] == 'ccTLD'
    assert data['idn_support'] is False
    assert TLDRecord.from_dict(data) == AI


def test_record_from_dict_accepts_yaml_dates():
    record = TLDRecord.from_dict({
        'tld': '.de',
        'type': 'ccTLD',
        'created_date': datetime.date(1986, 11, 5),
    })
    assert record.created_date == '1986-11-05'
    assert record.idn_support is IdnSupport.UNKNOWN
    assert record.has_emoji_flag is False

    record = TLDRecord.from_dict({'tld': '.su', 'type': 'ccTLD', 'created_date': 1990})
    assert record.created_date == '1990'


def test_load_table(tmp_path):
    path = _write_data(tmp_path / 'tlds.yaml', [COM.to_dict(), DE.to_dict()])
    table = load_table(path)
    assert table.records == (COM, DE)
    assert table.version == 'Version 1'


def test_load_table_missing_file(tmp_path):
    with pytest.raises(TLDDataError, match='not found'):
        load_table(str(tmp_path / 'missing.yaml'))


def test_load_table_invalid_yaml(tmp_path):
    path = tmp_path / 'broken.yaml'
    path.write_text('tlds: [unclosed', encoding='utf-8')
    with pytest.raises(TLDDataError):
        load_table(str(path))


@pytest.mark.parametrize('content', ['', '- just a list\n', 'tlds: nope\n', 'tlds:\n- {type: gTLD}\n'])
def test_load_table_malformed_document(tmp_path, content):
    path = tmp_path / 'malformed.yaml'
    path.write_text(content, encoding='utf-8')
    with pytest.raises(TLDDataError):
        load_table(str(path))


def test_bundled_data_satisfies_invariants():
    table = get_default_table()
    assert len(table) > 0
    assert get_default_table() is table
    for key, record in table.mapping.items():
        assert key == record.tld
        assert record.tld.startswith('.')
        assert record.tld == record.tld.lower()
        if record.has_emoji_flag:
            assert country_code_to_flag(record.country_code) is not None
    assert set(table.mapping.values()) == set(table.records)


def test_bundled_data_spot_checks():
    table = get_default_table()
    assert table.get('.com').registry == 'VeriSign Global Registry Services'
    assert table.get('.uk').country_code == 'GB'
    assert table.get('.no').country_code == 'NO'
    assert table.get('.test').status == 'reserved'
    assert table.get('.onion').type == 'special-use'
