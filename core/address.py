"""
Pull city, state and ZIP code out of a free-text US address.

These are position heuristics, not geocoding. Known limitation: a two-letter
word that happens to be a state code is taken as the state when it sits after
the real one, e.g. "Springfield, IL, Lake OR Pond" yields "OR".
"""

import re
from config import US_STATE_ABBREVIATIONS

ZIP_CODE_PATTERN = re.compile(r'\b\d{5}(?:-\d{4})?\b')


def extract_state(address: str | None) -> str:
    """Return the last comma/whitespace separated token that is a US state code, upper-cased"""
    if not address or not address.strip():
        return ''

    tokens = [token for token in re.split(r'[,\s]', address) if token]
    for token in reversed(tokens):
        candidate = token.strip().upper()
        if len(candidate) == 2 and candidate in US_STATE_ABBREVIATIONS:
            return candidate

    return ''


def extract_city(address: str | None) -> str:
    """Return the segment before the state/ZIP part of the address"""
    if not address or not address.strip():
        return ''

    parts = address.split(',')
    if len(parts) >= 2:
        return parts[-2].strip()

    # No commas: assume the last two words are state and ZIP
    words = address.split(' ')
    if len(words) > 2:
        return ' '.join(words[:-2])

    return ''


def extract_zip_code(address: str | None) -> str:
    """Return the first 5-digit (or ZIP+4) code in the address"""
    if not address or not address.strip():
        return ''

    match = ZIP_CODE_PATTERN.search(address)
    return match.group(0) if match else ''
