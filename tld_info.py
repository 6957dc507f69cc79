"""
TLD Info - Command Line Entry Point

Looks up, validates and searches top-level domain metadata:
- Single TLD lookup (with domain fallback, e.g. example.com -> .com)
- Substring search over TLD, registry and country code
- Listing by TLD type or country code
- Compiling the data file and generating Markdown docs

Configuration is read from config/settings.yaml when present.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml

from tldinfo import (
    TLDQueryEngine,
    TLDRecord,
    extract_tld,
    get_default_table,
    initialize_table,
    normalize_tld,
)
from tldinfo.compiler import (
    IANA_TLD_URL,
    TLDDataCompiler,
    fetch_iana_list,
    load_metadata,
    read_iana_list,
    write_data_file,
)
from tldinfo.docs_generator import write_markdown_docs
from tldinfo.table import DEFAULT_DATA_FILE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/settings.yaml"

DEFAULT_CONFIG = {
    'paths': {
        'data_file': None,
        'metadata_file': None,
        'iana_cache': 'data/tlds-alpha-by-domain.txt',
        'docs_output': 'docs/tld-table.md',
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(asctime)s - %(levelname)s - %(message)s',
        'console_output': True,
        'log_file': None,
    },
    'compiler': {
        'iana_url': IANA_TLD_URL,
        'timeout': 10,
    },
}

HELP_TEXT = """
Usage: tld-info <command|tld> [options]

Commands:
  <tldString>             Get info for a specific TLD (e.g., .com, ai).
  search <query>          Search TLDs by name, registry, or country code.
  validate <tldString>    Validate if a TLD is known.
  listall                 List all TLDs with basic info.
  compile [ianaListFile]  Compile the TLD data file from an IANA TLD list.
  docs                    Generate the Markdown TLD table.

Options:
  --type <tldType>        List TLDs of a specific type (e.g., ccTLD, gTLD).
  --country <countryCode> List TLDs for a specific country code (e.g., DE, US).
  --limit <n>             Maximum number of search results.
  --data <file>           Use this compiled TLD data file.
  --config <file>         Configuration file (default: config/settings.yaml).
  --metadata <file>       compile: TLD metadata overrides (YAML).
  --output <file>         compile/docs: output file.
  --download              compile: download a fresh IANA TLD list first.
  --help                  Show this help message.

Examples:
  tld-info .ai
  tld-info search Anguilla
  tld-info validate example.org
  tld-info --type gTLD
  tld-info --country JP
"""


class UsageError(Exception):
    """Raised for command line usage mistakes."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def load_config(config_file: str = DEFAULT_CONFIG_FILE) -> dict:
    """
    Load configuration from YAML file, on top of the built-in defaults.

    Args:
        config_file: Path to configuration file

    Returns:
        Configuration dictionary
    """
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if not os.path.exists(config_file):
        logger.warning(f"Configuration file '{config_file}' not found, using defaults")
        return config

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def setup_logging(config: dict):
    """
    Setup logging based on configuration.

    Console output goes to stderr so stdout only carries results.

    Args:
        config: Configuration dictionary
    """
    log_config = config.get('logging', {})
    log_file = log_config.get('log_file')

    handlers = []
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    if log_config.get('console_output', True):
        handlers.append(logging.StreamHandler(sys.stderr))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=getattr(logging, str(log_config.get('level', 'WARNING')).upper(), logging.WARNING),
        format=log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s'),
        handlers=handlers
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="tld-info", add_help=False)
    parser.add_argument("command", nargs="?")
    parser.add_argument("argument", nargs="?")
    parser.add_argument("--type", dest="tld_type", nargs="?", const="")
    parser.add_argument("--country", nargs="?", const="")
    parser.add_argument("--limit", type=int)
    parser.add_argument("--data")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE)
    parser.add_argument("--metadata")
    parser.add_argument("--output")
    parser.add_argument("--download", action="store_true")
    parser.add_argument("--help", "-h", action="store_true")
    return parser


def print_help():
    print(HELP_TEXT)


def format_tld_info(record: TLDRecord, engine: TLDQueryEngine) -> str:
    emoji = engine.emoji_flag(record.tld) if record.has_emoji_flag and record.country_code else None
    line = f"{record.tld}: {record.type}, Registry: {record.registry or 'N/A'}, Status: {record.status or 'N/A'}"
    if record.country_code:
        line += f", Country: {record.country_code}"
    if emoji:
        line += f", Emoji: {emoji}"
    return line


def print_records(records, engine: TLDQueryEngine):
    for record in records:
        print(format_tld_info(record, engine))


def _load_engine(args: argparse.Namespace, config: dict) -> TLDQueryEngine:
    data_file = args.data or config.get('paths', {}).get('data_file')
    if data_file:
        return TLDQueryEngine(initialize_table(data_file))
    return TLDQueryEngine(get_default_table())


def _usage_error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    print_help()
    return 0


def cmd_lookup(value: str, engine: TLDQueryEngine) -> None:
    record = engine.lookup(value)
    if record:
        print(format_tld_info(record, engine))
        return

    # A domain like example.com: report on its TLD part
    parts = value.split('.')
    if len(parts) > 1 and parts[0] != '':
        record = engine.lookup(extract_tld(value))
        if record:
            print(f"Information for the TLD part ('{record.tld}') of '{value}':")
            print(format_tld_info(record, engine))
            return

    print(f'No information found for TLD: "{normalize_tld(value)}".')
    print(f"Is it a valid TLD?  {engine.is_valid(value)}")


def cmd_compile(args: argparse.Namespace, config: dict) -> None:
    paths_config = config.get('paths', {})
    compiler_config = config.get('compiler', {})

    if args.download:
        list_file = fetch_iana_list(
            cache_file=args.argument or paths_config.get('iana_cache', 'data/tlds-alpha-by-domain.txt'),
            url=compiler_config.get('iana_url', IANA_TLD_URL),
            timeout=compiler_config.get('timeout', 10),
        )
    else:
        list_file = args.argument

    version, labels = read_iana_list(list_file)
    metadata = load_metadata(args.metadata or paths_config.get('metadata_file'))
    records = TLDDataCompiler(metadata).compile(labels)

    output = args.output or paths_config.get('data_file') or DEFAULT_DATA_FILE
    count = write_data_file(records, output, version=version)
    print(f"Compiled {count} TLDs to {output}")


def cmd_docs(args: argparse.Namespace, config: dict, engine: TLDQueryEngine) -> None:
    output = args.output or config.get('paths', {}).get('docs_output', 'docs/tld-table.md')
    write_markdown_docs(engine.list_all(), output)
    print(f"Successfully wrote Markdown documentation to {output}")


def run(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments and run one command.

    Returns:
        Process exit status
    """
    parser = _build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
    except UsageError as e:
        return _usage_error(str(e))

    if args.help or (args.command is None and args.tld_type is None and args.country is None):
        print_help()
        return 0

    config = load_config(args.config)
    setup_logging(config)

    command = args.command

    if command == 'compile':
        if not args.argument and not args.download:
            return _usage_error("IANA TLD list file is missing.")
        cmd_compile(args, config)
        return 0

    if command == 'search' and not args.argument:
        return _usage_error("Search query is missing.")
    if command == 'validate' and not args.argument:
        return _usage_error("TLD to validate is missing.")
    if command is None and args.tld_type == '':
        return _usage_error("--type option requires a value.")
    if command is None and args.country == '':
        return _usage_error("--country option requires a value.")

    engine = _load_engine(args, config)

    if command == 'docs':
        cmd_docs(args, config, engine)
        return 0

    if command == 'listall':
        records = engine.list_all()
        if not records:
            print("No TLD data available. Try running `tld-info compile` first.")
        else:
            print_records(records, engine)
        return 0

    if command == 'search':
        results = engine.search(args.argument, limit=args.limit)
        if not results:
            print(f'No TLDs found matching "{args.argument}".')
        else:
            print_records(results, engine)
        return 0

    if command == 'validate':
        print(str(engine.is_valid(extract_tld(args.argument))).lower())
        return 0

    if command is None and args.tld_type is not None:
        results = engine.filter_by_type(args.tld_type)
        if not results:
            print(f'No TLDs found for type "{args.tld_type}".')
        else:
            print_records(results, engine)
        return 0

    if command is None and args.country is not None:
        results = engine.filter_by_country(args.country)
        if not results:
            print(f'No TLDs found for country code "{args.country}".')
        else:
            print_records(results, engine)
        return 0

    cmd_lookup(command, engine)
    return 0


def main(argv: Optional[List[str]] = None):
    """Main function - runs the CLI and exits with its status."""
    try:
        status = run(argv)
    except Exception as e:
        logger.debug("CLI failure", exc_info=True)
        print(f"CLI Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
