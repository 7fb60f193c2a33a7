"""Query Schemas — Pydantic models for the specifier-based reachability question.

Invariants:
    - All models are frozen: a query is never mutated after construction
    - null or omitted fields receive their defaults at construction time
    - startLocation/endLocation are plain strings defaulting to "*" (everything);
      transitLocations/forbiddenLocations are Optional and None means unconstrained
    - No semantic validation of maxTraces or cross-field header consistency:
      values pass through to the engine unchanged

Design Decisions:
    - camelCase aliases via alias_generator, populate_by_name for Python callers
    - Header fields stay raw strings here; core/resolve_headers parses them so
      errors carry the same InvalidSpecifierError shape as every other field
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from reachq.core.domain_types import (
    ALL_EXPRESSION, DEFAULT_MAX_TRACES, QUESTION_NAME,
)
from reachq.core.resolve_dispositions import DEFAULT_ACTIONS


class _QueryModel(BaseModel):
    """Shared config: frozen, camelCase on the wire, null means default."""
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class TcpFlagsMatch(_QueryModel):
    """One TCP flags condition: True/False must match, None is don't-care."""
    cwr: bool | None = None
    ece: bool | None = None
    urg: bool | None = None
    ack: bool | None = None
    psh: bool | None = None
    rst: bool | None = None
    syn: bool | None = None
    fin: bool | None = None


class PacketHeaderConstraints(_QueryModel):
    """Per-field header constraints. None on a field means no restriction."""
    applications: str | None = None
    dscps: str | None = None
    dst_ips: str | None = None
    dst_ports: str | None = None
    ecns: str | None = None
    fragment_offsets: str | None = None
    icmp_codes: str | None = None
    icmp_types: str | None = None
    ip_protocols: str | None = None
    packet_lengths: str | None = None
    src_ips: str | None = None
    src_ports: str | None = None
    tcp_flags: tuple[TcpFlagsMatch, ...] | None = None

    @classmethod
    def unconstrained(cls) -> "PacketHeaderConstraints":
        return cls()


class PathConstraintsInput(_QueryModel):
    """Raw, unparsed path constraint expressions."""
    start_location: str = ALL_EXPRESSION
    end_location: str = ALL_EXPRESSION
    transit_locations: str | None = None
    forbidden_locations: str | None = None

    @classmethod
    def unconstrained(cls) -> "PathConstraintsInput":
        return cls()


class ReachabilityQuery(_QueryModel):
    """Specifier-based reachability question."""
    name: ClassVar[str] = QUESTION_NAME
    requires_data_plane: ClassVar[bool] = True

    actions: str = DEFAULT_ACTIONS
    headers: PacketHeaderConstraints = Field(
        default_factory=PacketHeaderConstraints.unconstrained,
    )
    ignore_filters: bool = False
    max_traces: int = DEFAULT_MAX_TRACES
    path_constraints: PathConstraintsInput = Field(
        default_factory=PathConstraintsInput.unconstrained,
    )
