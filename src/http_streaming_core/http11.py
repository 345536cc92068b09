"""
HTTP/1.1 wire handling for http_streaming_core.

This module builds and serializes requests and reads the status line
and headers of a response from a ByteStreamReader. Body framing is
left to the caller (see chunked.py and client.py).
"""

import base64
import logging
from typing import Dict, Optional, Tuple
from urllib.parse import quote, unquote, urlencode

import h11

from . import __version__
from .exceptions import (
    HttpStatusError,
    InvalidContentType,
    ProtocolError,
    TransportError,
)
from .http_primitives import (
    Body,
    Request,
    RequestOptions,
    ResponseHead,
    URLComponents,
    canonicalize_header_name,
)
from .network.reader import ByteStreamReader

logger = logging.getLogger(__name__)


ALLOWED_MIME_TYPES = ("application/json", "text/plain", "text/html")
DEFAULT_USER_AGENT = f"HttpStreamingCore/{__version__}"
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"
METHODS_WITH_BODY = (b"POST", b"PUT")
HEADER_TERMINATOR = b"\r\n"


def encode_body(body: Optional[Body]) -> bytes:
    """
    Serialize a request body.

    Mappings are form-url-encoded with spaces as %20, strings are
    UTF-8 encoded and None becomes an empty body.
    """
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return urlencode([(str(k), str(v)) for k, v in body.items()], quote_via=quote).encode("ascii")


def build_request(
    method: str,
    url: URLComponents,
    options: RequestOptions,
    compression: bool = True,
    user_agent: Optional[str] = None,
) -> Request:
    """
    Build an immutable Request from per-call options.

    Args:
        method: HTTP method (GET, POST, PUT)
        url: Parsed target URL
        options: Per-call options; its headers override any default
        compression: Client-wide default for requesting gzip
        user_agent: Client-wide User-Agent, used when options has none

    Returns:
        New Request instance
    """
    method_bytes = method.upper().encode("ascii")
    headers: Dict[str, str] = {
        "User-Agent": options.user_agent or user_agent or DEFAULT_USER_AGENT,
        "Accept": "*/*",
        "Accept-Charset": "utf-8",
    }

    body: Optional[bytes] = None
    if method_bytes in METHODS_WITH_BODY:
        headers["Content-Type"] = options.content_type or DEFAULT_CONTENT_TYPE
        body = encode_body(options.body)
        headers["Content-Length"] = str(len(body))

    if url.userinfo is not None:
        credentials = base64.b64encode(unquote(url.userinfo).encode("utf-8")).decode("ascii")
        headers["Authorization"] = f"Basic {credentials}"

    wants_gzip = options.compression if options.compression is not None else compression
    if wants_gzip:
        headers["Accept-Encoding"] = "gzip"

    for name, value in options.headers:
        headers[canonicalize_header_name(name)] = value

    return Request(
        method=method_bytes,
        url=url,
        headers=[(name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items()],
        body=body,
    )


def _host_header(host: str) -> bytes:
    if ":" in host:
        return f"[{host}]".encode("ascii")
    return host.encode("idna")


def serialize_request(request: Request) -> bytes:
    """
    Serialize a request to HTTP/1.1 wire bytes.

    The Host line comes first, followed by the request headers in
    order, a blank line and the body.

    Raises:
        ProtocolError: If the request cannot be expressed on the wire,
            e.g. a header value contains a line break.
    """
    connection = h11.Connection(h11.CLIENT)
    headers = list(request.headers)
    if request.get_header(b"Host") is None:
        headers.insert(0, (b"Host", _host_header(request.host)))

    try:
        data = connection.send(
            h11.Request(
                method=request.method,
                target=request.target.encode("ascii"),
                headers=headers,
            )
        )
        if request.body:
            data += connection.send(h11.Data(data=request.body))
        data += connection.send(h11.EndOfMessage())
    except h11.LocalProtocolError as e:
        raise ProtocolError(f"Cannot serialize request: {e}", e) from e

    return data


def _parse_status_line(line: bytes) -> Tuple[str, int, str]:
    parts = line.decode("latin-1").rstrip("\r\n").split(None, 2)
    if len(parts) < 2 or not parts[0].startswith("HTTP/"):
        raise ProtocolError(f"Malformed status line: {line!r}")
    try:
        status_code = int(parts[1])
    except ValueError as e:
        raise ProtocolError(f"Malformed status code: {parts[1]!r}", e) from e
    reason = parts[2].rstrip() if len(parts) == 3 else ""
    return parts[0], status_code, reason


def _parse_header_line(line: bytes) -> Tuple[str, str]:
    text = line.decode("latin-1").rstrip("\r\n")
    if ": " in text:
        name, value = text.split(": ", 1)
    elif ":" in text:
        name, value = text.split(":", 1)
        value = value.lstrip()
    else:
        raise ProtocolError(f"Malformed header line: {line!r}")
    return canonicalize_header_name(name.strip()), value.rstrip()


async def read_response_head(reader: ByteStreamReader) -> ResponseHead:
    """
    Read the status line and headers of a response.

    Lines are read up to and including the blank line that ends the
    header block; that line is consumed and nothing past it is read.

    Raises:
        TransportError: If the connection closes before the blank line.
        ProtocolError: If the status line or a header line is malformed.
    """
    status_line = await reader.readline()
    if not status_line.endswith(b"\n"):
        raise TransportError("Connection closed before a response was received")
    http_version, status_code, reason = _parse_status_line(status_line)
    logger.debug(f"HTTP response code is {status_code}")

    headers: Dict[str, str] = {}
    while True:
        line = await reader.readline()
        if not line.endswith(b"\n"):
            raise TransportError("Connection closed before end of response headers")
        if line in (HEADER_TERMINATOR, b"\n"):
            break
        name, value = _parse_header_line(line)
        headers[name] = value

    logger.debug(f"response headers: {headers}")
    return ResponseHead(
        http_version=http_version,
        status_code=status_code,
        reason=reason,
        headers=headers,
    )


def check_content_type(head: ResponseHead) -> str:
    """
    Ensure the response media type is one the client accepts.

    Returns:
        The media type, without parameters.

    Raises:
        InvalidContentType: If it is missing or not allowed.
    """
    content_type = head.content_type
    if content_type is None or content_type.lower() not in ALLOWED_MIME_TYPES:
        raise InvalidContentType(content_type)
    return content_type


async def reject_error_status(reader: ByteStreamReader, head: ResponseHead) -> None:
    """
    Raise HttpStatusError for any status other than 200.

    The error body (Content-Length bytes, zero when the header is
    missing) is drained and discarded first. A body cut short by the
    peer ends the drain without masking the status error.
    """
    if head.status_code == 200:
        return

    length = head.content_length or 0
    try:
        drained = await reader.readexactly(length)
        logger.warning(f"Discarded {len(drained)} byte body of HTTP {head.status_code} response")
    except TransportError as e:
        logger.debug(f"Error body for HTTP {head.status_code} was cut short: {e}")

    raise HttpStatusError(
        head.status_code,
        f"Received HTTP {head.status_code} response",
        head.headers,
    )
