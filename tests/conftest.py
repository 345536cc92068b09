"""
Pytest configuration for http_streaming_core tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import gzip
import os
import sys
from typing import Dict, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from http_streaming_core.network.mock import MockNetworkBackend, MockNetworkStream  # noqa: E402


def build_response(
    body: bytes = b"",
    status: str = "200 OK",
    headers: Optional[Dict[str, str]] = None,
) -> bytes:
    """Build raw response bytes: status line, headers, blank line, body."""
    lines = [f"HTTP/1.1 {status}"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + body


def chunk_body(chunks: List[bytes], terminator: bytes = b"0\r\n\r\n") -> bytes:
    """Frame payloads with chunked transfer encoding."""
    framed = b"".join(b"%x\r\n%s\r\n" % (len(chunk), chunk) for chunk in chunks)
    return framed + terminator


@pytest.fixture
def response_bytes():
    """Factory for raw HTTP responses."""
    return build_response


@pytest.fixture
def chunked():
    """Factory for chunked bodies."""
    return chunk_body


@pytest.fixture
def gzipped():
    """Compress data as a single gzip member."""
    def _compress(data: bytes) -> bytes:
        return gzip.compress(data)
    return _compress


@pytest.fixture
def mock_backend():
    """Create a mock network backend."""
    return MockNetworkBackend()


@pytest.fixture
def mock_stream():
    """Create a mock network stream preloaded with data."""
    def _create_stream(data: bytes = b"", **kwargs) -> MockNetworkStream:
        return MockNetworkStream(data, **kwargs)
    return _create_stream


@pytest.fixture
def sample_stream_data():
    """Sample stream data for testing."""
    return [
        b'{"event": 1}\n',
        b'{"event": 2}\n',
        b"event 3 holds a fake terminal chunk\r\n0\r\n\r\nafter it\n",
        b"x" * 4096,
    ]
