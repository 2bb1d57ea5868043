"""
Parser for SimpleABI interface files.

An ABI file is line oriented:

    # comment
    :name=AirDropToken
    :implements=Ownable,(https://example.com/abi/Pausable.abi)
    to:uniaddress amount:uint64 transfer:fn -> ok:uint8
    deposit:fn:payable -> void
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .core.config import (
    ATTRIBUTES, FN_TYPE, IMPLEMENTS_ATTRIBUTE, MODIFIERS, NAME_ATTRIBUTE,
    SEPARATOR, VOID
)
from .core.errors import ParseError
from .core.models import ContractInterface, Function, Parameter, TypeTag
from .utils.fetch import base_of, is_remote, load_source, resolve_reference

logger = logging.getLogger(__name__)


class LineKind(str, Enum):
    """What a single ABI line declares"""
    COMMENT = "comment"
    NAME = "name"
    IMPLEMENTS = "implements"
    FUNCTION = "function"


def _error(message: str, number: int, token: Optional[str] = None) -> ParseError:
    return ParseError(f"parser error: {message} at line {number}", line=number, token=token)


def parse_line(line: str, number: int) -> Tuple[LineKind, Any]:
    """
    Classify one line and parse its payload.

    Args:
        line: Line text without its terminator
        number: 0-based line number, used in error messages

    Returns:
        (kind, value) where value is None for comments, the attribute value
        for NAME/IMPLEMENTS and a Function for FUNCTION lines

    Raises:
        ParseError: If the line is malformed
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return LineKind.COMMENT, None

    if any(ch.isspace() for ch in line):
        return LineKind.FUNCTION, parse_function(line, number)

    attribute, value = parse_attribute(line, number)
    if attribute == NAME_ATTRIBUTE:
        return LineKind.NAME, value
    return LineKind.IMPLEMENTS, value


def parse_attribute(line: str, number: int) -> Tuple[str, str]:
    """Split ``:attribute=value`` into its attribute and value"""
    if not line.startswith(":"):
        raise _error('Expected ":"', number, token=line)

    body = line[1:]
    attribute = body.split("=")[0].split(":")[0]
    if attribute not in ATTRIBUTES:
        raise _error(
            f'No such token "{attribute}" available, try "name" or "implements" instead',
            number, token=attribute
        )

    parts = body.split("=")
    if len(parts) != 2 or parts[0] != attribute or not parts[1]:
        raise _error(
            'Invalid formatting, "name" or "implements" should be in the following format: '
            ':name=YourNameHere, :implements=YourImplementationHere',
            number, token=line
        )
    return attribute, parts[1]


def parse_function(line: str, number: int) -> Function:
    """
    Parse ``<inputs> -> <outputs>`` where exactly one input is ``name:fn``
    (optionally ``name:fn:payable``).
    """
    sides = line.split(SEPARATOR)
    if len(sides) > 2:
        raise _error(f'unexpected multiple "{SEPARATOR}"s in function signature', number)
    if len(sides) < 2:
        raise _error(f'missing "{SEPARATOR}" in function signature', number)

    left, right = sides[0].split(), sides[1].split()
    name, payable, left = _take_function_name(left, number)

    if not right:
        raise _error(f'no outputs declared, use "{VOID}" for a function without outputs', number)

    inputs = _gather_parameters(left, number)
    outputs = _gather_parameters(right, number)

    seen = set()
    for param in inputs + outputs:
        if param.name in seen:
            raise _error(f'duplicate parameter name "{param.name}"', number, token=param.name)
        seen.add(param.name)

    return Function(name=name, inputs=inputs, outputs=outputs, payable=payable)


def _take_function_name(tokens: List[str], number: int) -> Tuple[str, bool, List[str]]:
    """Find the ``name:fn[:modifier]`` token; returns (name, payable, remaining tokens)"""
    name = None
    index = -1
    modifiers: List[str] = []

    for i, token in enumerate(tokens):
        fields = token.split(":")
        if len(fields) < 2 or fields[1] != FN_TYPE:
            continue
        if name is not None:
            raise _error("numerous fn declarations in one function signature", number, token=token)
        if not fields[0]:
            raise _error(f'missing function name in "{token}"', number, token=token)
        name, index, modifiers = fields[0], i, fields[2:]

    if name is None:
        raise _error("No function name defined in the function signature", number)

    if len(modifiers) > 1:
        raise _error("more modifiers called than currently supported", number, token=tokens[index])
    if modifiers and modifiers[0] not in MODIFIERS:
        raise _error(f'unknown modifier "{modifiers[0]}"', number, token=modifiers[0])

    return name, bool(modifiers), tokens[:index] + tokens[index + 1:]


def _gather_parameters(tokens: List[str], number: int) -> Tuple[Parameter, ...]:
    if tokens == [VOID]:
        return ()
    if VOID in tokens:
        raise _error(f'"{VOID}" cannot be combined with other parameters', number, token=VOID)

    params = []
    for token in tokens:
        fields = token.split(":")
        if len(fields) != 2 or not fields[0] or not fields[1]:
            raise _error(
                f'Invalid formatting of parameter "{token}": needs to be formatted as name:type',
                number, token=token
            )
        param_name, type_name = fields
        type_tag = TypeTag.parse(type_name)
        if type_tag is None:
            raise _error(
                "Invalid type requested, valid types include: uint8-64, int8-64 and uniaddress "
                f"(optionally suffixed with []): received {type_name}",
                number, token=type_name
            )
        params.append(Parameter(name=param_name, type=type_tag))
    return tuple(params)


class AbiParser:
    """
    Parse ABI sources into ContractInterface objects, resolving
    ``implements`` references recursively.

    One parser instance tracks the chain of files currently being resolved
    so that cyclic references fail instead of recursing forever.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds to wait for remote interfaces (None: no limit)
        """
        self.timeout = timeout
        self._active: List[str] = []

    def parse_file(self, location: str) -> ContractInterface:
        """
        Parse an ABI file from a local path or an http(s) URL.

        Raises:
            ParseError: On any syntax error, unreadable file or failed fetch,
                        including errors in implemented interfaces
        """
        key = location if is_remote(location) else os.path.realpath(location)
        if key in self._active:
            chain = " -> ".join(self._active + [key])
            raise ParseError(f"parser error: cyclic implements: {chain}", location=location)

        self._active.append(key)
        try:
            source = load_source(location, self.timeout)
            return self.parse(source, base=base_of(location), location=location)
        finally:
            self._active.pop()

    def parse(self,
              source: str,
              base: Optional[str] = None,
              location: Optional[str] = None) -> ContractInterface:
        """
        Parse ABI text.

        Args:
            source: Full ABI text
            base: Directory or URL against which ``implements`` entries
                  resolve (current working directory if None)
            location: Name of the source, attached to errors

        Returns:
            Fully resolved ContractInterface
        """
        try:
            return self._parse_lines(source, base)
        except ParseError as e:
            if e.location is None:
                e.location = location
            raise

    def _parse_lines(self, source: str, base: Optional[str]) -> ContractInterface:
        name = None
        local: Dict[str, Function] = {}
        inherited: Dict[str, Function] = {}

        for number, line in enumerate(source.split("\n")):
            kind, value = parse_line(line, number)

            if kind is LineKind.NAME:
                if name is not None:
                    raise _error(
                        f"attempted to declare multiple names for contract {name}; "
                        "only one contract name allowed per instance",
                        number, token=value
                    )
                name = value
            elif kind is LineKind.FUNCTION:
                _merge_function(local, value, "local definition")
            elif kind is LineKind.IMPLEMENTS:
                self._implement(inherited, value, base, number)

        # local definitions come first and win wherever the implements line sits
        functions = dict(local)
        for fn in inherited.values():
            _merge_function(functions, fn, "implemented interface")
        return ContractInterface(name=name, functions=tuple(functions.values()))

    def _implement(self,
                   functions: Dict[str, Function],
                   value: str,
                   base: Optional[str],
                   number: int) -> None:
        for reference in value.split(","):
            try:
                locator = resolve_reference(reference, base)
            except ParseError as e:
                raise ParseError(f"{e.message} at line {number}", line=number, token=e.token) from e

            logger.debug("Resolving interface %s", locator)
            try:
                implemented = self.parse_file(locator)
            except ParseError as e:
                e.message = f"{e.message} (implemented at line {number})"
                e.args = (e.message,)
                raise
            for fn in implemented.functions:
                _merge_function(functions, fn, locator)


def _merge_function(functions: Dict[str, Function], fn: Function, origin: str) -> None:
    """Insert fn unless a function of that name already exists (first one wins)"""
    existing = functions.get(fn.name)
    if existing is None:
        functions[fn.name] = fn
    elif existing != fn:
        logger.warning(
            "Function %s from %s conflicts with an earlier definition; keeping the first",
            fn.name, origin
        )
    else:
        logger.debug("Function %s from %s already defined", fn.name, origin)


def parse(source: str, base: Optional[str] = None, timeout: Optional[float] = None) -> ContractInterface:
    """Parse ABI text; see AbiParser.parse"""
    return AbiParser(timeout).parse(source, base=base)


def parse_file(location: str, timeout: Optional[float] = None) -> ContractInterface:
    """Parse an ABI file or URL; see AbiParser.parse_file"""
    return AbiParser(timeout).parse_file(location)
