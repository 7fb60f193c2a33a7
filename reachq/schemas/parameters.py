"""Parameter Schemas — JSON rendering of ResolvedParameters for API responses.

Invariants:
    - Specifiers render as {"type": <specifier_type>, ...camelCase fields}
    - Absent waypoints render as null, never as an all-nodes specifier
    - IntRange renders as {"start", "end"}; networks render as CIDR strings
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from ipaddress import IPv4Network
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from reachq.core.assemble_parameters import ResolvedParameters
from reachq.core.domain_types import QUESTION_NAME


def to_json_value(value: Any) -> Any:
    """Recursively convert core value objects into JSON-ready data."""
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, IPv4Network):
        return str(value)
    if isinstance(value, (tuple, list)):
        return [to_json_value(v) for v in value]
    if is_dataclass(value):
        data: dict[str, Any] = {}
        specifier_type = getattr(value, "specifier_type", None)
        if specifier_type is not None:
            data["type"] = specifier_type
        for f in fields(value):
            data[to_camel(f.name)] = to_json_value(getattr(value, f.name))
        return data
    raise TypeError(f"Cannot serialize {type(value).__name__}")


class ResolvedParametersResponse(BaseModel):
    """Resolved reachability parameters as returned by the API."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str = QUESTION_NAME
    actions: list[str]
    header_space: dict[str, Any]
    source_locations: dict[str, Any]
    source_ip_space: dict[str, Any]
    destination_ip_space: dict[str, Any]
    final_nodes: dict[str, Any]
    required_transit_nodes: dict[str, Any] | None = None
    forbidden_transit_nodes: dict[str, Any] | None = None
    ignore_filters: bool
    max_traces: int
    specialize: bool

    @classmethod
    def from_parameters(cls, params: ResolvedParameters) -> "ResolvedParametersResponse":
        return cls(**{
            f.name: to_json_value(getattr(params, f.name)) for f in fields(params)
        })
