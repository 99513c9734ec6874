"""Test utilities for warble engines.

Provides an in-process ASGI test client and response assertions::

    from warble.testing import TestClient, assert_text
"""

from warble.testing.assertions import (
    assert_content_type,
    assert_json,
    assert_not_found,
    assert_status,
    assert_text,
)
from warble.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_content_type",
    "assert_json",
    "assert_not_found",
    "assert_status",
    "assert_text",
]
