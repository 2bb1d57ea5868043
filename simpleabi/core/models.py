"""
Data models for parsed contract interfaces
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class BaseType(str, Enum):
    """Element types understood by the ABI language"""
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    ADDRESS = "uniaddress"

    @property
    def is_address(self) -> bool:
        return self is BaseType.ADDRESS


@dataclass(frozen=True)
class TypeTag:
    """A base type, optionally marked as an array of that type"""
    base: BaseType
    is_array: bool = False

    @property
    def name(self) -> str:
        """ABI spelling of the type, e.g. ``uint8`` or ``uniaddress[]``"""
        return self.base.value + ("[]" if self.is_array else "")

    @property
    def is_address(self) -> bool:
        return not self.is_array and self.base.is_address

    @classmethod
    def parse(cls, text: str) -> Optional["TypeTag"]:
        """Look up an ABI type name; returns None if it is not recognised"""
        is_array = text.endswith("[]")
        if is_array:
            text = text[:-2]
        try:
            return cls(BaseType(text), is_array)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Parameter:
    """Named, typed function input or output"""
    name: str
    type: TypeTag


@dataclass(frozen=True)
class Function:
    """A callable contract function"""
    name: str
    inputs: Tuple[Parameter, ...] = ()
    outputs: Tuple[Parameter, ...] = ()
    payable: bool = False


@dataclass(frozen=True)
class ContractInterface:
    """Resolved contract: its name and the merged, ordered function list"""
    name: Optional[str]
    functions: Tuple[Function, ...] = ()

    def get(self, function_name: str) -> Optional[Function]:
        for fn in self.functions:
            if fn.name == function_name:
                return fn
        return None
