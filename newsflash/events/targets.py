"""
Newsflash Events — Targets
============================
Resolves the `target` argument of on/once/off/emit into a topic key.

A target is either:
- a single event name        -> SingleTarget, key is the name itself
- a list/tuple of names      -> JointTarget, key is the canonical form

Canonical form: distinct member names, sorted, joined by the separator.
['b', 'a'] and ['a', 'b'] resolve to the same key 'a,b'.
A list that collapses to one distinct name is a SingleTarget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple, Union

from newsflash.config.settings import DEFAULT_SEPARATOR
from newsflash.events.errors import InvalidEventError


@dataclass(frozen=True)
class SingleTarget:
    name: str

    @property
    def key(self) -> str:
        return self.name


@dataclass(frozen=True)
class JointTarget:
    members: Tuple[str, ...]  # sorted, distinct, len >= 2
    separator: str = DEFAULT_SEPARATOR

    @property
    def key(self) -> str:
        return canonical_key(self.members, self.separator)


Target = Union[SingleTarget, JointTarget]


def canonical_members(members: Iterable[str]) -> Tuple[str, ...]:
    """Distinct member names in sorted order."""
    return tuple(sorted(set(members)))


def canonical_key(
    members: Iterable[str], separator: str = DEFAULT_SEPARATOR
) -> str:
    """Order-independent key for a set of member names."""
    return separator.join(canonical_members(members))


def resolve_target(target: Any, separator: str = DEFAULT_SEPARATOR) -> Target:
    """
    Resolve a raw target once, at the API boundary.

    Any string is a valid single target. A joint member may not contain
    the separator, since "a,b" + "c" and "a" + "b,c" would otherwise
    share the key "a,b,c". Such lists are rejected even though every
    member is a string.

    Raises:
        InvalidEventError: target is not a str or a non-empty list/tuple
                           of str, or a member contains the separator
    """
    if isinstance(target, str):
        return SingleTarget(target)

    if not isinstance(target, (list, tuple)):
        raise InvalidEventError(target)

    if not target:
        raise InvalidEventError(target, "joint event needs at least one member")

    for member in target:
        if not isinstance(member, str):
            raise InvalidEventError(target, f"member {member!r} is not a string")
        if separator in member:
            raise InvalidEventError(
                target, f"member {member!r} contains separator {separator!r}"
            )

    members = canonical_members(target)
    if len(members) == 1:
        return SingleTarget(members[0])
    return JointTarget(members, separator)
