"""
Type mappings and configuration constants
"""

from .models import BaseType

ABI_EXTENSION = ".abi"

SUPPORTED_LANGUAGES = ("c",)

# URL schemes accepted for remote interfaces
REMOTE_SCHEMES = ("http", "https")

# Environment variable holding the default HTTP timeout (seconds) for the CLI
HTTP_TIMEOUT_ENV = "SIMPLEABI_HTTP_TIMEOUT"

# Attribute lines
NAME_ATTRIBUTE = "name"
IMPLEMENTS_ATTRIBUTE = "implements"
ATTRIBUTES = (NAME_ATTRIBUTE, IMPLEMENTS_ATTRIBUTE)

# Function lines
FN_TYPE = "fn"
VOID = "void"
SEPARATOR = "->"
MODIFIERS = ("payable",)

# C spellings
ADDRESS_STRUCT = "UniversalAddressABI"
C_INCLUDES = ("<stdlib.h>", "<qtum.h>")

# C99 keywords plus the stdbool/stddef macros; none may name a contract, function or parameter
C_KEYWORDS = {
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "inline", "int", "long", "register", "restrict", "return", "short",
    "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while", "_Bool", "_Complex", "_Imaginary",
    "bool", "true", "false", "NULL",
}

BASE_TYPE_TO_C = {
    BaseType.UINT8: "uint8_t",
    BaseType.UINT16: "uint16_t",
    BaseType.UINT32: "uint32_t",
    BaseType.UINT64: "uint64_t",
    BaseType.INT8: "int8_t",
    BaseType.INT16: "int16_t",
    BaseType.INT32: "int32_t",
    BaseType.INT64: "int64_t",
    BaseType.ADDRESS: ADDRESS_STRUCT,
}

# Stack primitives. Arrays always use the generic block push/pop.
PUSH_OP = {
    BaseType.UINT8: "qtumPush8",
    BaseType.INT8: "qtumPush8",
    BaseType.UINT16: "qtumPush16",
    BaseType.INT16: "qtumPush16",
    BaseType.UINT32: "qtumPush32",
    BaseType.INT32: "qtumPush32",
    BaseType.UINT64: "qtumPush64",
    BaseType.INT64: "qtumPush64",
    BaseType.ADDRESS: "qtumPush",
}

POP_OP = {
    BaseType.UINT8: "qtumPop8()",
    BaseType.INT8: "qtumPop8()",
    BaseType.UINT16: "qtumPop16()",
    BaseType.INT16: "qtumPop16()",
    BaseType.UINT32: "qtumPop32()",
    BaseType.INT32: "qtumPop32()",
    BaseType.UINT64: "qtumPop64()",
    BaseType.INT64: "qtumPop64()",
    BaseType.ADDRESS: "qtumPopExact",
}

ARRAY_PUSH_OP = "qtumPush"
ARRAY_POP_OP = "qtumPop"

# The selector is pushed as a 32-bit value
SELECTOR_PUSH_OP = PUSH_OP[BaseType.UINT32]
