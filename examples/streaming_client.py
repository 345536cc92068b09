"""
Streaming client examples using http_streaming_core.

This example demonstrates:
- Consuming a chunked JSON stream with a callback
- Posting a form body
- Stopping a long stream with interrupt()
"""

import asyncio
import json
import logging

from http_streaming_core import (
    HttpStatusError,
    InvalidContentType,
    StreamingClient,
    post,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def json_stream_demo():
    """Read newline-delimited JSON events as they arrive."""
    logger.info("=== JSON Stream Demo ===")

    events = []

    def on_chunk(chunk: bytes) -> None:
        for line in chunk.splitlines():
            if line.strip():
                events.append(json.loads(line))
                logger.info(f"Event {len(events)}: id={events[-1].get('id')}")

    client = StreamingClient()
    result = await client.get("http://httpbin.org/stream/5", callback=on_chunk)
    logger.info(f"Status {result.status_code}, {len(events)} events, outcome {result.outcome.value}")


async def post_form_demo():
    """Post a form body with the module level helper."""
    logger.info("=== POST Form Demo ===")

    result = await post("http://httpbin.org/post", {"track": "python asyncio"})
    echoed = json.loads(result.body)
    logger.info(f"Server saw form: {echoed.get('form')}")


async def interrupt_demo():
    """Stop a long JSON stream after a few events."""
    logger.info("=== Interrupt Demo ===")

    client = StreamingClient()
    chunks = []

    def on_chunk(chunk: bytes) -> None:
        chunks.append(chunk)
        logger.info(f"Received chunk {len(chunks)}: {len(chunk)} bytes")
        if len(chunks) == 3:
            client.interrupt()

    result = await client.get(
        "http://httpbin.org/stream/100",
        {"compression": False},
        callback=on_chunk,
    )
    logger.info(f"Stopped after {len(chunks)} chunks, cancelled={result.cancelled}")


async def main():
    """Run all examples."""
    logger.info("Starting streaming client examples...")

    try:
        await json_stream_demo()
        print()

        await post_form_demo()
        print()

        await interrupt_demo()

    except (HttpStatusError, InvalidContentType) as e:
        logger.error(f"Example failed: {e}")
        raise

    logger.info("All examples completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
