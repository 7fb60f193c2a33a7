"""Disposition Resolution — symbolic action set → sorted, filtered dispositions.

Invariants:
    - All functions are PURE: no IO, no side effects
    - expand_disposition_specifier never returns an empty set (empty input is an error)
    - resolve_dispositions output is sorted by declaration order, duplicate-free
    - LOOP is never handed to the engine (it does not search for loops here)

Design Decisions:
    - Groups and single names share one lookup table: "success, denied_in" just unions
    - Case-insensitive names: users type SUCCESS and success interchangeably
"""

from typing import Iterable

from reachq.core.domain_types import FlowDisposition as D
from reachq.core.specifiers import resolve_expression

DEFAULT_ACTIONS = "success"

DISPOSITION_GROUPS: dict[str, frozenset[D]] = {
    "success": frozenset({D.ACCEPTED, D.DELIVERED_TO_SUBNET, D.EXITS_NETWORK}),
    "failure": frozenset({
        D.DENIED_IN, D.DENIED_OUT, D.INSUFFICIENT_INFO, D.LOOP,
        D.NEIGHBOR_UNREACHABLE, D.NO_ROUTE, D.NULL_ROUTED,
    }),
    "dropped": frozenset({D.DENIED_IN, D.DENIED_OUT, D.NO_ROUTE, D.NULL_ROUTED}),
    "dropped_acl": frozenset({D.DENIED_IN, D.DENIED_OUT}),
    "dropped_route": frozenset({D.NO_ROUTE, D.NULL_ROUTED}),
    **{d.value: frozenset({d}) for d in D},
}

UNSUPPORTED_DISPOSITIONS = frozenset({D.LOOP})


def expand_disposition_specifier(expression: str) -> frozenset[D]:
    """Expand "success, denied_in" into the union of named dispositions."""
    terms = [t.strip().lower() for t in expression.split(",")]
    if not expression.strip() or any(not t for t in terms):
        raise ValueError("empty disposition name")
    dispositions: set[D] = set()
    for term in terms:
        group = DISPOSITION_GROUPS.get(term)
        if group is None:
            raise ValueError(f"unknown disposition '{term}'")
        dispositions |= group
    return frozenset(dispositions)


def filter_dispositions(dispositions: Iterable[D]) -> set[D]:
    """Drop dispositions the engine cannot act on."""
    return {d for d in dispositions if d not in UNSUPPORTED_DISPOSITIONS}


def resolve_dispositions(expression: str = DEFAULT_ACTIONS) -> tuple[D, ...]:
    """Resolve the actions field into the engine's disposition tuple."""
    expanded = resolve_expression(
        "actions", expression, expand_disposition_specifier,
    )
    return tuple(sorted(filter_dispositions(expanded), key=lambda d: d.ordinal))
