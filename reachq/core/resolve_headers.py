"""Header Constraint Resolution — packet header constraints → HeaderSpace.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Absent (None) field → empty tuple → maximally permissive on that field
    - srcIps/dstIps are NOT placed in the header space (see resolve_ip_spaces)
    - No cross-field consistency checks: contradictions yield zero flows downstream

Design Decisions:
    - One explicit (field, parser) row per header field: every mapping visible
      in one place (ADR: ExMA no convention-over-config)
    - Errors name the camelCase request field so clients can locate the problem
"""

from reachq.core.domain_types import TcpFlag
from reachq.core.header_space import (
    DSCP_BOUNDS, ECN_BOUNDS, FRAGMENT_OFFSET_BOUNDS, ICMP_BOUNDS,
    PACKET_LENGTH_BOUNDS, PORT_BOUNDS,
    HeaderSpace, IntRange, TcpFlagsMask,
    parse_applications, parse_int_ranges, parse_ip_protocols,
)
from reachq.core.resolver_protocols import HeaderConstraintsLike, TcpFlagsLike
from reachq.core.specifiers import resolve_expression

# attribute name -> (request field name, bounds)
_RANGE_FIELDS: dict[str, tuple[str, IntRange]] = {
    "src_ports": ("headers.srcPorts", PORT_BOUNDS),
    "dst_ports": ("headers.dstPorts", PORT_BOUNDS),
    "icmp_types": ("headers.icmpTypes", ICMP_BOUNDS),
    "icmp_codes": ("headers.icmpCodes", ICMP_BOUNDS),
    "dscps": ("headers.dscps", DSCP_BOUNDS),
    "ecns": ("headers.ecns", ECN_BOUNDS),
    "packet_lengths": ("headers.packetLengths", PACKET_LENGTH_BOUNDS),
    "fragment_offsets": ("headers.fragmentOffsets", FRAGMENT_OFFSET_BOUNDS),
}


def _ranges(field: str, expression: str | None, bounds: IntRange) -> tuple[IntRange, ...]:
    if expression is None:
        return ()
    return resolve_expression(
        field, expression, lambda e: parse_int_ranges(e, bounds),
    )


def tcp_flags_mask(match: TcpFlagsLike) -> TcpFlagsMask:
    """Fold per-flag True/False/None conditions into a (mask, value) pair."""
    mask = value = 0
    for flag in TcpFlag:
        wanted = getattr(match, flag.value)
        if wanted is None:
            continue
        mask |= flag.bit
        if wanted:
            value |= flag.bit
    return TcpFlagsMask(mask=mask, value=value)


def resolve_header_space(headers: HeaderConstraintsLike) -> HeaderSpace:
    """Expand every present header constraint into its header-space bound."""
    protocols: tuple[tuple[int, ...], tuple[int, ...]] = ((), ())
    if headers.ip_protocols is not None:
        protocols = resolve_expression(
            "headers.ipProtocols", headers.ip_protocols, parse_ip_protocols,
        )
    applications: tuple[str, ...] = ()
    if headers.applications is not None:
        applications = resolve_expression(
            "headers.applications", headers.applications, parse_applications,
        )
    ranges = {
        attr: _ranges(field, getattr(headers, attr), bounds)
        for attr, (field, bounds) in _RANGE_FIELDS.items()
    }
    return HeaderSpace(
        ip_protocols=protocols[0],
        not_ip_protocols=protocols[1],
        applications=applications,
        tcp_flags=tuple(tcp_flags_mask(m) for m in headers.tcp_flags or ()),
        **ranges,
    )
