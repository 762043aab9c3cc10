"""
Title Matching Utilities

Text normalization and fuzzy matching for comparing Spotify metadata to
iTunes search results.

Functions in this module are stateless and can be used independently.
"""

import re
import logging

logger = logging.getLogger(__name__)


# Trailing "- Remastered 2011", "- Deluxe Edition", "- Live at ..." etc.
# Everything from the dash to the end of the string is dropped.
TITLE_SUFFIX_KEYWORDS = [
    'Remaster', 'Deluxe', 'Bonus', 'Anniversary', 'Expanded', 'Live'
]

_BRACKETED_RE = re.compile(r'\s*[(\[].*?[)\]]')
_SUFFIX_RE = re.compile(
    r'\s*-\s*(' + '|'.join(TITLE_SUFFIX_KEYWORDS) + r').*$',
    re.IGNORECASE
)
_NON_ALNUM_RE = re.compile(r'[^a-z0-9]')


def normalize_title(title: str) -> str:
    """
    Strip annotations that confuse iTunes search from a title.

    Examples:
        "Song Title (feat. Other Artist) - Remastered 2024" -> "Song Title"
        "Album [Deluxe Edition]" -> "Album"
        "Night Train" -> "Night Train" (unchanged)

    Returns:
        Cleaned title; may be empty if the title was nothing but annotations
    """
    if not title:
        return ''

    text = _BRACKETED_RE.sub('', title)
    text = _SUFFIX_RE.sub('', text)
    return text.strip()


def comparison_key(text: str) -> str:
    """
    Lowercase and drop everything outside [a-z0-9].

    "Don't Stop Me Now!" -> "dontstopmenow"
    """
    if not text:
        return ''
    return _NON_ALNUM_RE.sub('', text.lower())


def unicode_comparison_key(text: str) -> str:
    """
    Casefold and keep only alphanumeric characters from any script.

    Used when comparison_key() leaves nothing behind, e.g. for
    Japanese or Cyrillic titles.
    """
    if not text:
        return ''
    return ''.join(ch for ch in text.casefold() if ch.isalnum())


def fuzzy_match(a: str, b: str) -> bool:
    """
    True if one string contains the other after normalization.

    Symmetric. Note that an empty key is contained in everything, so callers
    must not pass an empty operand where that would count as a match.
    """
    key_a = comparison_key(a)
    key_b = comparison_key(b)
    return key_a in key_b or key_b in key_a


def names_match(candidate: str, expected: str) -> bool:
    """
    Guarded fuzzy_match for validating a candidate field.

    - An empty candidate or expected value never matches.
    - If either side has no ASCII letters or digits, the comparison falls
      back to containment on unicode_comparison_key().
    - Names with no alphanumerics at all ("!!!", "+/-") must be equal,
      ignoring case and surrounding whitespace.
    """
    if not candidate or not expected:
        return False

    if comparison_key(candidate) and comparison_key(expected):
        return fuzzy_match(candidate, expected)

    key_candidate = unicode_comparison_key(candidate)
    key_expected = unicode_comparison_key(expected)
    if not key_candidate and not key_expected:
        stripped = candidate.strip().casefold()
        return bool(stripped) and stripped == expected.strip().casefold()
    if not key_candidate or not key_expected:
        return False

    logger.debug(f"Non-ASCII comparison: '{candidate}' vs '{expected}'")
    return key_candidate in key_expected or key_expected in key_candidate


def split_artist_credit(artist: str) -> list:
    """
    Artist names to try when browsing an artist's catalog.

    Examples:
        "PaulK, reezy" -> ["PaulK, reezy", "PaulK"]
        "Rick Astley" -> ["Rick Astley"]
    """
    if not artist:
        return []

    names = [artist]
    if ',' in artist:
        primary = artist.split(',')[0].strip()
        if primary and primary not in names:
            names.append(primary)
    return names
