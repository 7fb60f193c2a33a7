"""Header Space — value types and field parsers for packet header bounds.

Invariants:
    - An empty tuple on any field means "no restriction", never "nothing matches"
    - IntRange is inclusive on both ends and start <= end
    - parse_int_ranges output is sorted with overlapping/adjacent ranges merged
    - Parsers raise ValueError; callers attach the field name

Design Decisions:
    - Frozen dataclasses with tuple fields: hashable, safe to hand to the engine
    - Field bounds live next to the parsers so every caller validates the same way
"""

from dataclasses import dataclass

from reachq.core.domain_types import IpProtocol


@dataclass(frozen=True, order=True)
class IntRange:
    """Inclusive integer range."""
    start: int
    end: int

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class TcpFlagsMask:
    """Match when (flags & mask) == value."""
    mask: int
    value: int

    def matches(self, flags: int) -> bool:
        return flags & self.mask == self.value


@dataclass(frozen=True)
class HeaderSpace:
    """Bounds on packet header fields. Source/destination IPs are not held here."""
    ip_protocols: tuple[int, ...] = ()
    not_ip_protocols: tuple[int, ...] = ()
    src_ports: tuple[IntRange, ...] = ()
    dst_ports: tuple[IntRange, ...] = ()
    icmp_types: tuple[IntRange, ...] = ()
    icmp_codes: tuple[IntRange, ...] = ()
    dscps: tuple[IntRange, ...] = ()
    ecns: tuple[IntRange, ...] = ()
    packet_lengths: tuple[IntRange, ...] = ()
    fragment_offsets: tuple[IntRange, ...] = ()
    applications: tuple[str, ...] = ()
    tcp_flags: tuple[TcpFlagsMask, ...] = ()

    @property
    def is_unconstrained(self) -> bool:
        return self == HeaderSpace()


# ─── Field bounds ────────────────────────────────────────────────

PORT_BOUNDS = IntRange(0, 65535)
DSCP_BOUNDS = IntRange(0, 63)
ECN_BOUNDS = IntRange(0, 3)
ICMP_BOUNDS = IntRange(0, 255)
PACKET_LENGTH_BOUNDS = IntRange(0, 65535)
FRAGMENT_OFFSET_BOUNDS = IntRange(0, 8191)
IP_PROTOCOL_BOUNDS = IntRange(0, 255)

# Well-known applications: name -> (protocol, destination ports)
APPLICATIONS: dict[str, tuple[IpProtocol, tuple[int, ...]]] = {
    "bgp": (IpProtocol.TCP, (179,)),
    "dns": (IpProtocol.UDP, (53,)),
    "ftp": (IpProtocol.TCP, (21,)),
    "http": (IpProtocol.TCP, (80,)),
    "https": (IpProtocol.TCP, (443,)),
    "icmp": (IpProtocol.ICMP, ()),
    "ldap": (IpProtocol.TCP, (389,)),
    "ntp": (IpProtocol.UDP, (123,)),
    "smtp": (IpProtocol.TCP, (25,)),
    "snmp": (IpProtocol.UDP, (161,)),
    "ssh": (IpProtocol.TCP, (22,)),
    "syslog": (IpProtocol.UDP, (514,)),
    "telnet": (IpProtocol.TCP, (23,)),
}


def _split_terms(expression: str) -> list[str]:
    terms = [t.strip() for t in expression.split(",")]
    if not expression.strip() or any(not t for t in terms):
        raise ValueError("empty term")
    return terms


def _parse_int(token: str, bounds: IntRange) -> int:
    # int() alone would also take "+22", "1_000" and non-ASCII digits
    if not (token.isascii() and token.isdigit()):
        raise ValueError(f"'{token}' is not an integer")
    value = int(token)
    if not bounds.contains(value):
        raise ValueError(f"{value} outside {bounds.start}-{bounds.end}")
    return value


def merge_ranges(ranges: list[IntRange]) -> tuple[IntRange, ...]:
    """Sort and merge overlapping or adjacent ranges."""
    merged: list[IntRange] = []
    for r in sorted(ranges):
        if merged and r.start <= merged[-1].end + 1:
            last = merged[-1]
            merged[-1] = IntRange(last.start, max(last.end, r.end))
        else:
            merged.append(r)
    return tuple(merged)


def parse_int_ranges(expression: str, bounds: IntRange) -> tuple[IntRange, ...]:
    """Parse "22, 80-90" style expressions within bounds."""
    ranges = []
    for term in _split_terms(expression):
        low, sep, high = term.partition("-")
        start = _parse_int(low.strip(), bounds)
        end = _parse_int(high.strip(), bounds) if sep else start
        if start > end:
            raise ValueError(f"range '{term}' has start greater than end")
        ranges.append(IntRange(start, end))
    return merge_ranges(ranges)


def parse_ip_protocols(expression: str) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Parse "TCP, UDP, !ICMP, 50" into (included, excluded) protocol numbers."""
    included: set[int] = set()
    excluded: set[int] = set()
    for term in _split_terms(expression):
        negated = term.startswith("!")
        token = term[1:].strip() if negated else term
        if token.isdigit():
            number = _parse_int(token, IP_PROTOCOL_BOUNDS)
        else:
            try:
                number = IpProtocol[token.upper().replace("-", "_")].value
            except KeyError:
                raise ValueError(f"unknown IP protocol '{token}'") from None
        (excluded if negated else included).add(number)
    return tuple(sorted(included)), tuple(sorted(excluded))


def parse_applications(expression: str) -> tuple[str, ...]:
    """Parse "ssh, HTTP" into sorted, deduplicated known application names."""
    names = set()
    for term in _split_terms(expression):
        name = term.lower()
        if name not in APPLICATIONS:
            raise ValueError(f"unknown application '{term}'")
        names.add(name)
    return tuple(sorted(names))
