"""Domain Types — enums and constants shared by every reachability resolver.

Invariants:
    - FlowDisposition declaration order IS the canonical sort order
    - IpProtocol values are IANA protocol numbers (0-255)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (ADR: response bodies are JSON)
    - IntEnum for IpProtocol: header space stores protocol numbers, names are aliases
"""

from enum import Enum, IntEnum


# ─── Constants ───────────────────────────────────────────────────

QUESTION_NAME = "specifiersReachability"
DEFAULT_MAX_TRACES = 10_000

# Reserved expression meaning "every node" / "every location"
ALL_EXPRESSION = "*"


# ─── Enums ───────────────────────────────────────────────────────

class FlowDisposition(str, Enum):
    """Categorical outcome of a simulated flow."""
    ACCEPTED = "accepted"
    DELIVERED_TO_SUBNET = "delivered_to_subnet"
    DENIED_IN = "denied_in"
    DENIED_OUT = "denied_out"
    EXITS_NETWORK = "exits_network"
    INSUFFICIENT_INFO = "insufficient_info"
    LOOP = "loop"
    NEIGHBOR_UNREACHABLE = "neighbor_unreachable"
    NO_ROUTE = "no_route"
    NULL_ROUTED = "null_routed"

    @property
    def ordinal(self) -> int:
        return _DISPOSITION_ORDER[self]


_DISPOSITION_ORDER = {d: i for i, d in enumerate(FlowDisposition)}


class IpProtocol(IntEnum):
    """Named IP protocols accepted in ipProtocols expressions."""
    ICMP = 1
    IGMP = 2
    TCP = 6
    UDP = 17
    GRE = 47
    ESP = 50
    AHP = 51
    IPV6_ICMP = 58
    EIGRP = 88
    OSPF = 89
    PIM = 103
    VRRP = 112
    SCTP = 132


class LocationType(str, Enum):
    """Where a flow is injected relative to an interface."""
    INTERFACE = "interface"            # originates from the interface itself
    INTERFACE_LINK = "interfaceLink"   # enters the interface from its link


class TcpFlag(str, Enum):
    """TCP header flags, bit value = position in the flags byte."""
    CWR = "cwr"
    ECE = "ece"
    URG = "urg"
    ACK = "ack"
    PSH = "psh"
    RST = "rst"
    SYN = "syn"
    FIN = "fin"

    @property
    def bit(self) -> int:
        return _TCP_FLAG_BITS[self]


_TCP_FLAG_BITS = {
    TcpFlag.CWR: 0x80,
    TcpFlag.ECE: 0x40,
    TcpFlag.URG: 0x20,
    TcpFlag.ACK: 0x10,
    TcpFlag.PSH: 0x08,
    TcpFlag.RST: 0x04,
    TcpFlag.SYN: 0x02,
    TcpFlag.FIN: 0x01,
}
