"""Name resolution shared by every shape table.

Shape names arrive in many spellings (``extra_rounded``, ``extraRounded``,
``Extra-Rounded``). They all collapse to one lookup key.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


def lookup_key(name: str) -> str:
    return name.strip().lower().replace("_", "-").replace("-", "").replace(" ", "")


def build_index(members: Iterable[E], aliases: dict[str, E]) -> dict[str, E]:
    index: dict[str, E] = {lookup_key(m.value): m for m in members}
    for alias, member in aliases.items():
        index[lookup_key(alias)] = member
    return index


def find(name: object, index: dict[str, E]) -> E | None:
    """Return the member for ``name`` or None when the table does not know it."""
    if isinstance(name, enum.Enum):
        name = name.value
    if not isinstance(name, str) or not name.strip():
        return None
    return index.get(lookup_key(name))


def resolve(name: object, index: dict[str, E], default: E, kind: str) -> tuple[E, str | None]:
    """Resolve ``name`` against ``index``, falling back to ``default``.

    Returns the member plus a warning message when a fallback happened. An
    empty or missing name is not a fallback.
    """
    if name is None or (isinstance(name, str) and not name.strip()):
        return default, None
    member = find(name, index)
    if member is not None:
        return member, None
    message = f"Unknown {kind} '{name}', using '{default.value}'"
    logger.warning(message)
    return default, message


def check_exhaustive(enum_cls: type[E], table: dict[E, object]) -> None:
    missing = [m for m in enum_cls if m not in table]
    if missing:
        raise RuntimeError(f"{enum_cls.__name__} has no generator for: {missing}")
