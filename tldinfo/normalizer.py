"""
TLD string normalization.
"""


def normalize_tld(value: str) -> str:
    """
    Normalize a TLD string to its canonical key form.

    Trims surrounding whitespace, lowercases and makes sure the result starts
    with a dot ('COM', ' .Com ' -> '.com').

    Args:
        value: TLD string, with or without leading dot

    Returns:
        Canonical TLD string. Empty, whitespace-only or lone-dot input is
        returned unchanged and will not match any table key.
    """
    if not value or not value.strip() or value.strip() == '.':
        return value

    trimmed = value.strip().lower()
    return trimmed if trimmed.startswith('.') else f".{trimmed}"


def extract_tld(value: str) -> str:
    """
    Extract the TLD part of a domain name.

    Args:
        value: TLD or domain name (e.g., 'example.org')

    Returns:
        '.' plus the last dot-separated label when there is more than one
        label, otherwise the input unchanged
    """
    parts = value.split('.')
    if len(parts) > 1:
        return f".{parts[-1]}"
    return value
