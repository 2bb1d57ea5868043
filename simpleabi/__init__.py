"""
SimpleABI: C encoder/dispatcher generator for Qtum contract interfaces
"""

from .core.errors import ParseError, RenderError, SimpleABIError, UsageError
from .core.models import BaseType, ContractInterface, Function, Parameter, TypeTag
from .core.pipeline import generate
from .generators.c import ArtifactKind, render, render_all
from .parser import AbiParser, parse, parse_file
from .utils.hashing import function_selector

__version__ = "0.1.0"
__all__ = [
    "generate",
    "parse",
    "parse_file",
    "render",
    "render_all",
    "function_selector",
    "AbiParser",
    "ArtifactKind",
    "BaseType",
    "ContractInterface",
    "Function",
    "Parameter",
    "TypeTag",
    "ParseError",
    "RenderError",
    "SimpleABIError",
    "UsageError",
]
