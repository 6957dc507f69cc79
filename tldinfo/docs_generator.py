"""
Markdown documentation for the TLD table.
"""

import logging
import os
from typing import Sequence

from .models import IdnSupport, TLDRecord
from .query import country_code_to_flag

logger = logging.getLogger(__name__)

COLUMNS = [
    'TLD', 'Type', 'Registry', 'Country Code', 'Status',
    'Created Date', 'IDN Support', 'Emoji Flag',
]


def _cell(value) -> str:
    if value is None or value == '':
        return 'N/A'
    # Pipes would split the cell
    return str(value).replace('|', '\\|')


def _idn_cell(idn_support: IdnSupport) -> str:
    value = idn_support.as_bool()
    if value is None:
        return 'N/A'
    return 'true' if value else 'false'


def generate_markdown_table(records: Sequence[TLDRecord]) -> str:
    """
    Render TLD records as a Markdown document with one table row per TLD.

    Args:
        records: Records in table order

    Returns:
        Markdown text
    """
    lines = [
        '# TLD Information Table',
        '',
        'A comprehensive list of Top-Level Domains (TLDs) and their metadata.',
        '',
        '| ' + ' | '.join(COLUMNS) + ' |',
        '|' + '|'.join('-' * (len(column) + 2) for column in COLUMNS) + '|',
    ]

    for record in records:
        flag = None
        if record.has_emoji_flag:
            flag = country_code_to_flag(record.country_code)
        cells = [
            _cell(record.tld),
            _cell(record.type),
            _cell(record.registry),
            _cell(record.country_code),
            _cell(record.status),
            _cell(record.created_date),
            _idn_cell(record.idn_support),
            _cell(flag),
        ]
        lines.append('| ' + ' | '.join(cells) + ' |')

    return '\n'.join(lines) + '\n'


def write_markdown_docs(records: Sequence[TLDRecord], output_path: str) -> str:
    """
    Generate the Markdown table and write it to `output_path`.

    Args:
        records: Records in table order
        output_path: Destination .md file; parent directories are created

    Returns:
        The path written
    """
    if not records:
        logger.warning("TLD table is empty. Markdown will be generated with no data.")

    content = generate_markdown_table(records)

    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(content)

    logger.info(f"Wrote Markdown documentation for {len(records)} TLDs to {output_path}")
    return output_path
