"""
Function selector derivation.
A selector is the dispatch tag the generated code pushes with every call.
"""

import hashlib

from ..core.config import SEPARATOR
from ..core.models import Function

SELECTOR_BYTES = 4


def canonical_signature(contract_name: str, function: Function) -> str:
    """
    Build the string a selector is hashed from.

    Input types, then ``<contract>_<function>``, then ``->``, then output
    types, joined by single spaces:

        uint8 int64 MyContract_myFunction -> uint8 int32
    """
    parts = [param.type.name for param in function.inputs]
    parts.append(f"{contract_name}_{function.name}")
    parts.append(SEPARATOR)
    parts.extend(param.type.name for param in function.outputs)
    return " ".join(parts)


def function_selector(contract_name: str, function: Function) -> str:
    """
    Compute the 4-byte selector of a function as a C hex literal.

    Returns:
        ``0x`` followed by 8 lowercase hex digits (first 4 bytes of the
        SHA-256 of the canonical signature)
    """
    signature = canonical_signature(contract_name, function)
    digest = hashlib.sha256(signature.encode("utf-8")).digest()
    return "0x" + digest[:SELECTOR_BYTES].hex()
