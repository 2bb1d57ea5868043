"""
Loading ABI sources from disk or over HTTP(S)
"""

import logging
import os
from typing import Optional
from urllib.parse import urljoin, urlparse

import requests

from ..core.config import ABI_EXTENSION, REMOTE_SCHEMES
from ..core.errors import ParseError

logger = logging.getLogger(__name__)


def is_remote(location: str) -> bool:
    """True if the location is an http(s) URL"""
    return urlparse(location).scheme.lower() in REMOTE_SCHEMES


def resolve_reference(reference: str, base: Optional[str] = None) -> str:
    """
    Resolve one entry of an ``implements`` list to a file path or URL.

    A bare name ``Token`` becomes ``Token.abi`` next to ``base``; a
    parenthesized entry ``(locator)`` is used as given, with relative paths
    resolved against ``base``.

    Args:
        reference: Entry as written in the ABI file
        base: Directory or URL of the file containing the reference
              (current working directory if None)

    Returns:
        Absolute file path or http(s) URL

    Raises:
        ParseError: On malformed entries or unsupported URL schemes
    """
    reference = reference.strip()
    if not reference:
        raise ParseError("parser error: empty interface reference")

    if "(" not in reference and ")" not in reference:
        locator = reference + ABI_EXTENSION
    else:
        start = reference.find("(")
        end = reference.rfind(")")
        if start != 0 or end != len(reference) - 1 or reference.count("(") != reference.count(")"):
            raise ParseError(
                'parser error: Invalid formatting of interface location: '
                'should be formatted as "(myUrl/located/here.com)"',
                token=reference
            )
        locator = reference[1:-1].strip()
        if not locator:
            raise ParseError("parser error: empty interface location", token=reference)

    scheme = urlparse(locator).scheme.lower()
    if scheme in REMOTE_SCHEMES:
        return locator
    # single letters are Windows drive names, not URL schemes
    if len(scheme) > 1:
        raise ParseError(
            "parser error: schemes outside of http/https are not supported",
            token=locator
        )

    if base is not None and is_remote(base):
        return urljoin(base, locator)
    return os.path.abspath(os.path.join(base or os.getcwd(), locator))


def base_of(location: str) -> str:
    """Directory or URL against which references inside ``location`` resolve"""
    if is_remote(location):
        return location
    return os.path.dirname(os.path.abspath(location))


def read_local(path: str) -> str:
    """Read a UTF-8 ABI file from disk"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"parser error: unable to read interface file {path}: {e}",
                         location=path) from e


def fetch_remote(url: str, timeout: Optional[float] = None) -> str:
    """
    Download a UTF-8 ABI file.

    Args:
        url: http(s) URL
        timeout: Seconds to wait for the server, None to wait indefinitely

    Raises:
        ParseError: Wrapping the transport or decoding error
    """
    logger.debug("Fetching %s (timeout=%s)", url, timeout)
    try:
        with requests.get(url, timeout=timeout) as response:
            response.raise_for_status()
            return response.content.decode("utf-8")
    except requests.RequestException as e:
        raise ParseError(f"parser error: unable to fetch interface {url}: {e}",
                         location=url) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"parser error: interface {url} is not valid UTF-8: {e}",
                         location=url) from e


def load_source(location: str, timeout: Optional[float] = None) -> str:
    """Read ABI text from a local path or an http(s) URL"""
    if is_remote(location):
        return fetch_remote(location, timeout)
    return read_local(location)
