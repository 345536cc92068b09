"""
HTTP primitives for http_streaming_core.

This module defines the core data structures for HTTP requests and responses.
All classes are immutable to ensure thread safety and simplify reasoning.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)
from urllib.parse import urlsplit

from .network.stream import NetworkStream
from .network.utils import default_port


# Type aliases for better readability
Headers = List[Tuple[bytes, bytes]]
Body = Union[bytes, str, Mapping[str, Any]]
StatusCode = int


def canonicalize_header_name(name: str) -> str:
    """
    Canonicalize a header name to Word-Capitalized-With-Hyphens.

    >>> canonicalize_header_name("content-TYPE")
    'Content-Type'
    """
    return "-".join(part.capitalize() for part in name.split("-"))


class TransferMode(Enum):
    """How the end of a response body is found."""
    CONTENT_LENGTH = "content-length"  # Exactly Content-Length bytes
    CHUNKED = "chunked"                # Transfer-Encoding: chunked
    UNBOUNDED = "unbounded"            # Read until the peer closes


class URLComponents(NamedTuple):
    """Immutable representation of URL components."""
    scheme: str
    host: str
    port: int
    path: str
    query: str = ""
    userinfo: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> "URLComponents":
        """
        Create URLComponents from a URL string.

        Raises:
            ValueError: If the URL has no host or an invalid port.
        """
        parsed = urlsplit(url)
        if not parsed.hostname:
            raise ValueError(f"No hostname found in URL: {url!r}")

        scheme = parsed.scheme or "http"
        port = parsed.port or default_port(scheme)
        userinfo = None
        if "@" in parsed.netloc:
            userinfo = parsed.netloc.rpartition("@")[0]

        return cls(
            scheme=scheme,
            host=parsed.hostname,
            port=port,
            path=parsed.path or "/",
            query=parsed.query,
            userinfo=userinfo,
        )

    @property
    def target(self) -> str:
        """The request target: path plus query string, if any."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"


@dataclass(frozen=True)
class Request:
    """
    Immutable HTTP request representation.

    Headers are stored in wire order with canonical names. Once
    created, the request cannot be modified.
    """

    method: bytes
    url: URLComponents
    headers: Headers = field(default_factory=list)
    body: Optional[bytes] = None

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not isinstance(self.method, bytes):
            raise ValueError("method must be bytes")

        if not isinstance(self.url, URLComponents):
            raise ValueError("url must be URLComponents")

        if not isinstance(self.headers, list):
            raise ValueError("headers must be a list")

        for name, value in self.headers:
            if not isinstance(name, bytes) or not isinstance(value, bytes):
                raise ValueError("header names and values must be bytes")

        if self.body is not None and not isinstance(self.body, bytes):
            raise ValueError("body must be bytes")

    def get_header(self, name: Union[str, bytes]) -> Optional[bytes]:
        """Get a header value by name (case-insensitive)."""
        if isinstance(name, str):
            name = name.encode()

        name_lower = name.lower()
        for header_name, header_value in self.headers:
            if header_name.lower() == name_lower:
                return header_value

        return None

    @property
    def host(self) -> str:
        return self.url.host

    @property
    def target(self) -> str:
        return self.url.target


@dataclass(frozen=True)
class ResponseHead:
    """
    Status line and headers of an HTTP response.

    Header names are canonicalized; when a header was repeated,
    the last occurrence is kept.
    """

    http_version: str
    status_code: StatusCode
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> Optional[str]:
        """The media type without parameters, e.g. "application/json"."""
        value = self.headers.get("Content-Type")
        if value is None:
            return None
        return value.split(";", 1)[0].strip()

    @property
    def content_length(self) -> Optional[int]:
        """Content-Length as an int, or None when missing or invalid."""
        value = self.headers.get("Content-Length")
        if value is None:
            return None
        try:
            length = int(value.strip())
        except ValueError:
            return None
        return length if length >= 0 else None

    @property
    def is_chunked(self) -> bool:
        return self.headers.get("Transfer-Encoding", "").strip().lower() == "chunked"

    @property
    def is_gzip_encoded(self) -> bool:
        return self.headers.get("Content-Encoding", "").strip().lower() == "gzip"

    @property
    def transfer_mode(self) -> TransferMode:
        """Derive the body framing from the headers."""
        if self.is_chunked:
            return TransferMode.CHUNKED
        if self.content_length is not None:
            return TransferMode.CONTENT_LENGTH
        return TransferMode.UNBOUNDED


# Keys accepted by RequestOptions.from_mapping, mapped to field names
_OPTION_KEYS = {
    "headers": "headers",
    "compression": "compression",
    "body": "body",
    "socket": "stream",
    "stream": "stream",
    "Content-Type": "content_type",
    "User-Agent": "user_agent",
}


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call request configuration.

    A new value is built for every call; nothing is merged back into
    the client or reused across requests.
    """

    headers: Tuple[Tuple[str, str], ...] = ()
    compression: Optional[bool] = None
    body: Optional[Body] = None
    stream: Optional[NetworkStream] = None
    content_type: Optional[str] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        if self.headers is None:
            object.__setattr__(self, "headers", ())
        elif isinstance(self.headers, Mapping):
            object.__setattr__(
                self, "headers", tuple((str(k), str(v)) for k, v in self.headers.items())
            )
        elif not isinstance(self.headers, tuple):
            object.__setattr__(self, "headers", tuple(self.headers))

    @classmethod
    def from_mapping(
        cls,
        options: Union["RequestOptions", Mapping[str, Any], None] = None,
    ) -> "RequestOptions":
        """
        Build options from a plain mapping.

        Recognized keys: "headers", "compression", "body", "socket"
        (or "stream"), "Content-Type" and "User-Agent".

        Raises:
            TypeError: If an unknown key is present.
        """
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options

        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in _OPTION_KEYS:
                raise TypeError(f"Unknown request option: {key!r}")
            kwargs[_OPTION_KEYS[key]] = value
        return cls(**kwargs)

    def with_body(self, body: Optional[Body]) -> "RequestOptions":
        """Create new options with a different body."""
        return replace(self, body=body)
