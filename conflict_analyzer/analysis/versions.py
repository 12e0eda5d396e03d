"""Version string helpers.

NuGet dependency versions are declared as ranges ("[1.0,2.0)", "1.0" meaning
">= 1.0"). The analyzer does not perform range resolution; ranges are reduced
to a single label by stripping the range syntax.
"""
from typing import Union

from packaging.version import InvalidVersion, Version

# Two-character comparators go first so that no stray "=" is left behind.
_RANGE_TOKENS = (">=", "<=", "[", "]", "(", ")", ">", "<", "=")

SortKey = tuple[int, Union[Version, str], str]


def normalize_version(raw_version: str) -> str:
    """Strip version range specifiers from a declared version.

    Removes the characters ``[ ] ( ) > < =`` (and the ``>=``/``<=`` pairs)
    everywhere in the string, then trims surrounding whitespace. The result is
    a best-effort label, not a validated version:

        "[1.0.0, 2.0.0)" -> "1.0.0, 2.0.0"
        ">=1.2.3"        -> "1.2.3"
        "3.0.0"          -> "3.0.0"

    Args:
        raw_version: Version or range expression from a package manifest.

    Returns:
        The stripped version label.
    """
    cleaned = raw_version
    for token in _RANGE_TOKENS:
        cleaned = cleaned.replace(token, "")
    return cleaned.strip()


def version_sort_key(version: str) -> SortKey:
    """Sort key ordering versions for display.

    Versions that parse as PEP 440 versions are ordered numerically and come
    first; anything else (ranges collapsed by normalize_version, floating
    versions) follows in plain string order.

    Args:
        version: Version label.

    Returns:
        Tuple usable as a sort key.
    """
    try:
        return (0, Version(version), version)
    except InvalidVersion:
        return (1, version, version)
