"""
Main generation pipeline
"""

import logging
from typing import Dict, Optional

from .errors import UsageError
from ..generators.c import render_all
from ..parser import AbiParser

logger = logging.getLogger(__name__)


def generate(location: str,
             encode: bool = True,
             decode: bool = True,
             timeout: Optional[float] = None) -> Dict:
    """
    Parse an ABI file and render the requested C artifacts.

    Args:
        location: Path or http(s) URL of the .abi file
        encode: Generate the caller-side encoder (``<Name>ABI.c/.h``)
        decode: Generate the dispatcher (``<Name>Dispatcher.c/.h``)
        timeout: Seconds to wait for remote interfaces

    Returns:
        Dict with:
            - interface: the parsed ContractInterface
            - artifacts: {file_name: text}

    Raises:
        UsageError: If neither encode nor decode is requested
        ParseError: If the ABI file or an implemented interface is invalid
        RenderError: If the interface cannot be expressed in C
    """
    if not encode and not decode:
        raise UsageError("Must select one of encode or decode (or both)")

    interface = AbiParser(timeout).parse_file(location)
    logger.debug("Parsed %s: contract %s with %d functions",
                 location, interface.name, len(interface.functions))

    artifacts = render_all(interface, encode=encode, decode=decode)

    return {
        "interface": interface,
        "artifacts": artifacts
    }
