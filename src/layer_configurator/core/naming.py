"""Unique names for duplicated configurations"""

import re
from typing import Iterable, Optional, Union

from .configuration import Configuration

# "Name (3)" -> base "Name", number 3
_DUPLICATE_SUFFIX = re.compile(r"^(?P<base>.*?)\s*\((?P<number>\d+)\)$")


def extract_duplicate_number(name: str) -> Optional[int]:
    """Get N from a name ending in " (N)", or None."""
    match = _DUPLICATE_SUFFIX.match(name)
    if match is None:
        return None
    return int(match.group("number"))


def extract_base_name(name: str) -> str:
    """Strip a trailing " (N)" from a name."""
    match = _DUPLICATE_SUFFIX.match(name)
    if match is None:
        return name
    return match.group("base")


def make_unique_name(existing: Iterable[Union[Configuration, str]], proposed_name: str) -> str:
    """Make a configuration name that collides with none of the existing ones.

    "Foo" stays "Foo" when nothing starts with "Foo". Otherwise the result is
    "Foo (N)" where N is one more than the highest duplicate number among the
    names starting with "Foo", a name without a number counting as 1. A
    proposed "Foo (2)" is treated as "Foo".

    Args:
        existing: Configurations, or their names, already in use
        proposed_name: Name the caller would like

    Returns:
        A name not equal to any existing one
    """
    names = {item if isinstance(item, str) else item.key for item in existing}
    base_name = extract_base_name(proposed_name)

    max_duplicate = 0
    for name in names:
        if not name.startswith(base_name):
            continue
        number = extract_duplicate_number(name)
        max_duplicate = max(max_duplicate, number if number is not None else 1)

    if max_duplicate == 0:
        return base_name

    return f"{base_name} ({max_duplicate + 1})"
