"""Core utility functions for spell-range."""

import re

_SPELL_LINK = re.compile(r"spell:(\d+)")


def parse_spell_id_from_link(link: str | None) -> int | None:
    """Extract the numeric spell ID embedded in a spell link.

    Links look like ``|cff71d5ff|Hspell:133:0|h[Fireball]|h|r``; anything
    without a ``spell:<digits>`` segment yields None.
    """
    if not link:
        return None
    match = _SPELL_LINK.search(link)
    if match is None:
        return None
    return int(match.group(1))
