"""
Tests for gzip decoding.
"""

import gzip
import os
import zlib

import pytest

from http_streaming_core.decoders import GzipStreamDecoder, decode_gzip_member
from http_streaming_core.exceptions import DecodeError, StreamError


def _splits(data: bytes, size: int):
    return [data[i:i + size] for i in range(0, len(data), size)]


class TestDecodeGzipMember:
    """Test one-shot decoding."""

    def test_round_trip(self):
        data = b'{"event": "x"}\n' * 100
        assert decode_gzip_member(gzip.compress(data)) == data

    def test_malformed(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_gzip_member(b"definitely not gzip")
        assert isinstance(exc_info.value.cause, zlib.error)

    def test_truncated(self):
        with pytest.raises(DecodeError):
            decode_gzip_member(gzip.compress(b"hello world" * 50)[:-12])


class TestGzipStreamDecoder:
    """Test incremental decoding."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("split", [1, 2, 5, 10, 17, 64, 1000, 100000])
    async def test_output_independent_of_split_points(self, split):
        """Any feed size, including 1 byte, yields the same output."""
        original = os.urandom(2000) + b"compressible " * 500
        output = []

        async with GzipStreamDecoder(output.append) as decoder:
            for piece in _splits(gzip.compress(original), split):
                await decoder.feed(piece)

        assert b"".join(output) == original
        assert decoder.closed

    @pytest.mark.asyncio
    async def test_output_arrives_before_close(self):
        """Decoded bytes are emitted as soon as they are decodable."""
        original = os.urandom(20000)
        output = []
        decoder = GzipStreamDecoder(output.append)
        compressed = gzip.compress(original)

        await decoder.feed(compressed[: len(compressed) // 2])
        assert output

        await decoder.feed(compressed[len(compressed) // 2:])
        await decoder.aclose()
        assert b"".join(output) == original

    @pytest.mark.asyncio
    async def test_concatenated_members(self):
        """Several gzip members in one stream decode back to back."""
        members = gzip.compress(b"alpha ") + gzip.compress(b"beta ") + gzip.compress(b"gamma")
        output = []

        async with GzipStreamDecoder(output.append) as decoder:
            for piece in _splits(members, 7):
                await decoder.feed(piece)

        assert b"".join(output) == b"alpha beta gamma"

    @pytest.mark.asyncio
    async def test_member_boundary_on_feed_boundary(self):
        first, second = gzip.compress(b"one"), gzip.compress(b"two")
        output = []

        async with GzipStreamDecoder(output.append) as decoder:
            await decoder.feed(first)
            await decoder.feed(second)

        assert b"".join(output) == b"onetwo"

    @pytest.mark.asyncio
    async def test_async_callback(self):
        output = []

        async def collect(data: bytes) -> None:
            output.append(data)

        async with GzipStreamDecoder(collect) as decoder:
            await decoder.feed(gzip.compress(b"async output"))

        assert b"".join(output) == b"async output"

    @pytest.mark.asyncio
    async def test_malformed_input(self):
        decoder = GzipStreamDecoder(lambda data: None)

        with pytest.raises(DecodeError):
            await decoder.feed(b"this is not a gzip stream at all")

    @pytest.mark.asyncio
    async def test_context_manager_releases_on_error(self):
        """The engine is released even when decoding fails."""
        with pytest.raises(DecodeError):
            async with GzipStreamDecoder(lambda data: None) as decoder:
                await decoder.feed(b"\x00" * 32)

        assert decoder.closed

    @pytest.mark.asyncio
    async def test_missing_trailer(self):
        """A member without its CRC32 and ISIZE trailer fails on close."""
        output = []
        truncated = gzip.compress(b"event\n" * 500)[:-8]

        with pytest.raises(DecodeError, match="Truncated"):
            async with GzipStreamDecoder(output.append) as decoder:
                await decoder.feed(truncated)

        assert b"".join(output) == b"event\n" * 500
        assert decoder.closed

    @pytest.mark.asyncio
    async def test_truncated_second_member(self):
        members = gzip.compress(b"complete") + gzip.compress(b"partial")[:12]
        decoder = GzipStreamDecoder(lambda data: None)
        await decoder.feed(members)

        with pytest.raises(DecodeError):
            await decoder.aclose()

    @pytest.mark.asyncio
    async def test_lenient_close_accepts_partial_member(self):
        output = []
        decoder = GzipStreamDecoder(output.append)
        await decoder.feed(gzip.compress(b"event\n" * 500)[:-8])

        await decoder.aclose(strict=False)

        assert decoder.closed
        assert b"".join(output) == b"event\n" * 500

    @pytest.mark.asyncio
    async def test_close_without_input(self):
        decoder = GzipStreamDecoder(lambda data: None)
        await decoder.aclose()
        assert decoder.bytes_out == 0

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        output = []
        decoder = GzipStreamDecoder(output.append)
        await decoder.feed(gzip.compress(b"once"))

        await decoder.aclose()
        await decoder.aclose()

        assert b"".join(output) == b"once"

    @pytest.mark.asyncio
    async def test_feed_after_close(self):
        decoder = GzipStreamDecoder(lambda data: None)
        await decoder.aclose()

        with pytest.raises(StreamError):
            await decoder.feed(gzip.compress(b"late"))

    @pytest.mark.asyncio
    async def test_byte_counters(self):
        compressed = gzip.compress(b"z" * 1000)

        async with GzipStreamDecoder(lambda data: None) as decoder:
            await decoder.feed(compressed)

        assert decoder.bytes_in == len(compressed)
        assert decoder.bytes_out == 1000
