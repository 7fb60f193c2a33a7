"""Header Space — tests for range/protocol/application parsers.

Tests cover:
    - parse_int_ranges: singles, ranges, merging, bounds, malformed input
    - parse_ip_protocols: names, numbers, negation, unknown names
    - parse_applications: normalization, dedup, unknown names
    - HeaderSpace.is_unconstrained and TcpFlagsMask.matches
"""

import pytest

from reachq.core.header_space import (
    DSCP_BOUNDS, PORT_BOUNDS,
    HeaderSpace, IntRange, TcpFlagsMask,
    merge_ranges, parse_applications, parse_int_ranges, parse_ip_protocols,
)


# ─── parse_int_ranges ────────────────────────────────────────────

def test_single_values_and_ranges():
    assert parse_int_ranges("22, 80-90", PORT_BOUNDS) == (
        IntRange(22, 22), IntRange(80, 90),
    )


def test_overlapping_and_adjacent_ranges_merge():
    assert parse_int_ranges("80-90, 85-100, 101, 22", PORT_BOUNDS) == (
        IntRange(22, 22), IntRange(80, 101),
    )


def test_whitespace_around_dash_is_tolerated():
    assert parse_int_ranges(" 10 - 20 ", PORT_BOUNDS) == (IntRange(10, 20),)


@pytest.mark.parametrize("expression", [
    "", " ", "22,", "abc", "90-80", "1-2-3", "+22", "1_000", "\u0662\u0662",
])
def test_malformed_ranges_raise(expression):
    with pytest.raises(ValueError):
        parse_int_ranges(expression, PORT_BOUNDS)


def test_out_of_bounds_value_raises():
    with pytest.raises(ValueError, match="outside 0-63"):
        parse_int_ranges("64", DSCP_BOUNDS)


def test_merge_ranges_sorts():
    assert merge_ranges([IntRange(5, 6), IntRange(1, 2)]) == (
        IntRange(1, 2), IntRange(5, 6),
    )


# ─── parse_ip_protocols ──────────────────────────────────────────

def test_protocol_names_and_numbers():
    assert parse_ip_protocols("tcp, UDP, 50") == ((6, 17, 50), ())


def test_protocol_negation():
    assert parse_ip_protocols("!icmp, tcp") == ((6,), (1,))


def test_protocol_dashed_name():
    assert parse_ip_protocols("ipv6-icmp") == ((58,), ())


def test_unknown_protocol_raises():
    with pytest.raises(ValueError, match="unknown IP protocol"):
        parse_ip_protocols("tcpp")


def test_protocol_number_out_of_range_raises():
    with pytest.raises(ValueError):
        parse_ip_protocols("256")


def test_protocol_number_must_be_ascii_digits():
    with pytest.raises(ValueError, match="not an integer"):
        parse_ip_protocols("٦")


# ─── parse_applications ──────────────────────────────────────────

def test_applications_normalized_and_deduplicated():
    assert parse_applications("SSH, http, ssh") == ("http", "ssh")


def test_unknown_application_raises():
    with pytest.raises(ValueError, match="unknown application"):
        parse_applications("gopher")


# ─── value types ─────────────────────────────────────────────────

def test_default_header_space_is_unconstrained():
    assert HeaderSpace().is_unconstrained


def test_header_space_with_ports_is_constrained():
    assert not HeaderSpace(dst_ports=(IntRange(22, 22),)).is_unconstrained


def test_tcp_flags_mask_matches():
    syn_only = TcpFlagsMask(mask=0x12, value=0x02)  # SYN set, ACK clear
    assert syn_only.matches(0x02)
    assert not syn_only.matches(0x12)
