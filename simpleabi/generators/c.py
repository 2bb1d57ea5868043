"""
C artifact generation: encoder and dispatcher sources and headers
"""

import re
from enum import Enum
from typing import Callable, Dict, List

from ..core.config import C_INCLUDES, C_KEYWORDS
from ..core.errors import RenderError
from ..core.models import ContractInterface
from ..translators.signatures import decode_signature, encode_signature, function_id
from ..translators.statements import dispatch_body, encode_body, indent_block
from ..utils.hashing import function_selector

C_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Names declared by the generated code itself
RESERVED_PARAMETER_NAMES = {"r", "fn", "__address", "__options"}


class ArtifactKind(str, Enum):
    """The four files generated per contract"""
    ENCODE_SOURCE = "encode-source"
    ENCODE_HEADER = "encode-header"
    DECODE_SOURCE = "decode-source"
    DECODE_HEADER = "decode-header"


ENCODE_KINDS = (ArtifactKind.ENCODE_SOURCE, ArtifactKind.ENCODE_HEADER)
DECODE_KINDS = (ArtifactKind.DECODE_SOURCE, ArtifactKind.DECODE_HEADER)

ARTIFACT_SUFFIXES = {
    ArtifactKind.ENCODE_SOURCE: "ABI.c",
    ArtifactKind.ENCODE_HEADER: "ABI.h",
    ArtifactKind.DECODE_SOURCE: "Dispatcher.c",
    ArtifactKind.DECODE_HEADER: "Dispatcher.h",
}


def artifact_name(contract_name: str, kind: ArtifactKind) -> str:
    """File name of an artifact, e.g. ``AirDropTokenDispatcher.c``"""
    return contract_name + ARTIFACT_SUFFIXES[kind]


def include_guard(contract_name: str, kind: ArtifactKind) -> str:
    stem = "ABI" if kind in ENCODE_KINDS else "DISPATCHER"
    return f"{contract_name.upper()}_{stem}_H"


def validate_interface(model: ContractInterface) -> None:
    """
    Check that every name used in the generated C is a usable identifier
    and that no two functions share a selector.

    Raises:
        RenderError: On a missing contract name, an unusable identifier,
                     a name clash or a selector collision
    """
    if not model.name:
        raise RenderError("contract has no name; declare one with :name=YourNameHere")
    if not _usable_identifier(model.name):
        raise RenderError(f'contract name "{model.name}" is not a valid C identifier')

    selectors: Dict[str, str] = {}
    for fn in model.functions:
        if not _usable_identifier(fn.name):
            raise RenderError(f'function name "{fn.name}" is not a valid C identifier')

        params = fn.inputs + fn.outputs
        names = {param.name for param in params}
        for param in params:
            if not _usable_identifier(param.name):
                raise RenderError(
                    f'parameter "{param.name}" of {fn.name} is not a valid C identifier'
                )
            if param.name in RESERVED_PARAMETER_NAMES:
                raise RenderError(
                    f'parameter "{param.name}" of {fn.name} clashes with a generated name'
                )
            if param.type.is_array and f"{param.name}_sz" in names:
                raise RenderError(
                    f'parameter "{param.name}_sz" of {fn.name} clashes with the size of array "{param.name}"'
                )

        selector = function_selector(model.name, fn)
        if selector in selectors:
            raise RenderError(
                f"functions {selectors[selector]} and {fn.name} share the selector {selector}"
            )
        selectors[selector] = fn.name


def _usable_identifier(name: str) -> bool:
    return bool(C_IDENTIFIER.match(name)) and name not in C_KEYWORDS


def _includes() -> List[str]:
    return [f"#include {header}" for header in C_INCLUDES]


def _function_ids(model: ContractInterface, guarded: bool) -> List[str]:
    lines = ["//Function IDs"]
    for fn in model.functions:
        macro = function_id(model.name, fn)
        define = f"#define {macro} {function_selector(model.name, fn)}"
        if guarded:
            lines.extend([f"#ifndef {macro}", define, "#endif"])
        else:
            lines.append(define)
    return lines


def _wrap_header(model: ContractInterface, kind: ArtifactKind, body: List[str]) -> str:
    guard = include_guard(model.name, kind)
    lines = [f"#ifndef {guard}", f"#define {guard}", ""]
    lines.extend(body)
    lines.extend(["", f"#endif // {guard}"])
    return "\n".join(lines) + "\n"


def render_encode_source(model: ContractInterface) -> str:
    lines = _includes() + [""] + _function_ids(model, guarded=False) + [""]
    for fn in model.functions:
        lines.append(f"QtumCallResult {encode_signature(model.name, fn)}{{")
        lines.append(indent_block(encode_body(model.name, fn)))
        lines.append("}")
        lines.append("")
    return "\n".join(lines)


def render_encode_header(model: ContractInterface) -> str:
    body = _includes() + [""] + _function_ids(model, guarded=True) + ["", "//prototypes"]
    for fn in model.functions:
        body.append(f"QtumCallResult {encode_signature(model.name, fn)};")
    return _wrap_header(model, ArtifactKind.ENCODE_HEADER, body)


def render_decode_source(model: ContractInterface) -> str:
    lines = _includes() + [""] + _function_ids(model, guarded=False) + ["", "//prototypes"]
    for fn in model.functions:
        lines.append(f"void {decode_signature(model.name, fn)};")

    lines.extend([
        "",
        "//dispatch code",
        "void dispatch(){",
        "\tuint32_t fn;",
        "\tif(qtumPop(&fn, sizeof(fn)) != sizeof(fn)){",
        "\t\t//fallback function / error",
        '\t\tqtumError("missing function selector");',
        "\t}",
        "\tswitch(fn){",
    ])
    for fn in model.functions:
        lines.append(f"\t\tcase {function_id(model.name, fn)}:")
        lines.append("\t\t{")
        lines.append(indent_block(dispatch_body(model.name, fn), 3))
        lines.append("\t\t}")
    lines.extend([
        "\t\tdefault:",
        "\t\t\t//fallback function / error",
        '\t\t\tqtumError("unknown function selector");',
        "\t\t\tbreak;",
        "\t}",
        "}",
    ])
    return "\n".join(lines) + "\n"


def render_decode_header(model: ContractInterface) -> str:
    body = _includes() + [""] + _function_ids(model, guarded=True) + ["", "//prototypes"]
    for fn in model.functions:
        body.append(f"void {decode_signature(model.name, fn)};")
    body.append("void dispatch();")
    return _wrap_header(model, ArtifactKind.DECODE_HEADER, body)


RENDERERS: Dict[ArtifactKind, Callable[[ContractInterface], str]] = {
    ArtifactKind.ENCODE_SOURCE: render_encode_source,
    ArtifactKind.ENCODE_HEADER: render_encode_header,
    ArtifactKind.DECODE_SOURCE: render_decode_source,
    ArtifactKind.DECODE_HEADER: render_decode_header,
}


def render(model: ContractInterface, kind: ArtifactKind) -> str:
    """
    Render one artifact.

    Args:
        model: Parsed contract interface
        kind: Which artifact to produce (an ArtifactKind or its string value)

    Returns:
        C source text; identical input always yields identical text

    Raises:
        RenderError: On an unknown kind or a model that cannot be expressed in C
    """
    try:
        renderer = RENDERERS[ArtifactKind(kind)]
    except ValueError as e:
        raise RenderError(f"unknown artifact kind: {kind}") from e

    validate_interface(model)
    return renderer(model)


def render_all(model: ContractInterface, encode: bool = True, decode: bool = True) -> Dict[str, str]:
    """
    Render the encoder and/or dispatcher artifacts.

    Returns:
        {file_name: text}, e.g. {"TokenABI.c": ..., "TokenABI.h": ...}
    """
    validate_interface(model)
    kinds = []
    if encode:
        kinds.extend(ENCODE_KINDS)
    if decode:
        kinds.extend(DECODE_KINDS)
    return {artifact_name(model.name, kind): render(model, kind) for kind in kinds}
