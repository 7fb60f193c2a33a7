"""Error Handlers — tests for request field naming in validation errors.

Tests cover:
    - the "body" prefix is dropped so names match InvalidSpecifierError fields
    - list indices render in brackets
    - an error on the whole body is reported as "body"
"""

import pytest

from reachq.api.error_handlers import request_field_name


@pytest.mark.parametrize("loc, expected", [
    (("body", "maxTraces"), "maxTraces"),
    (("body", "pathConstraints", "startLocation"), "pathConstraints.startLocation"),
    (("body", "headers", "tcpFlags", 0, "syn"), "headers.tcpFlags[0].syn"),
    (("body",), "body"),
    (("query", "limit"), "query.limit"),
])
def test_request_field_name(loc, expected):
    assert request_field_name(loc) == expected
