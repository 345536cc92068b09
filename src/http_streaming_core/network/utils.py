"""
Network utilities for http_streaming_core.

Helpers shared by URL parsing and the asyncio backend.
"""

import ssl
from typing import List, Optional


def create_ssl_context(
    alpn_protocols: Optional[List[str]] = None,
    verify_mode: int = ssl.CERT_REQUIRED,
    check_hostname: bool = True,
    cert_file: Optional[str] = None,
    key_file: Optional[str] = None,
) -> ssl.SSLContext:
    """
    Build the TLS context used for https URIs.

    The peer certificate and hostname are verified unless the caller
    relaxes verify_mode or check_hostname. A client certificate is
    loaded when both cert_file and key_file are given. TLS 1.2 is the
    lowest version offered.
    """
    context = ssl.create_default_context()
    context.check_hostname = check_hostname
    context.verify_mode = verify_mode
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.options |= ssl.OP_NO_COMPRESSION

    if alpn_protocols:
        context.set_alpn_protocols(alpn_protocols)
    if cert_file and key_file:
        context.load_cert_chain(cert_file, key_file)
    return context


def default_port(scheme: str) -> int:
    """443 for https, 80 for anything else."""
    return 443 if scheme == "https" else 80
