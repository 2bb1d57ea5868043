"""
C prototypes and call expressions for contract functions
"""

from typing import List

from ..core.config import ADDRESS_STRUCT, BASE_TYPE_TO_C
from ..core.models import Function, Parameter, TypeTag

CALL_OPTIONS = ("UniversalAddress *__address", "QtumCallOptions* __options")


def c_type(type_tag: TypeTag) -> str:
    """C spelling of the element type (``uint8_t``, ``UniversalAddressABI``)"""
    return BASE_TYPE_TO_C[type_tag.base]


def function_id(contract_name: str, function: Function) -> str:
    """Name of the macro holding the function's selector"""
    return f"ID_{contract_name}_{function.name}"


def qualified_name(contract_name: str, function: Function) -> str:
    return f"{contract_name}_{function.name}"


def input_declarations(param: Parameter) -> List[str]:
    """Arrays expand to (pointer, size); addresses are passed by pointer"""
    name = param.name
    if param.type.is_array:
        return [f"{c_type(param.type)}* {name}", f"size_t {name}_sz"]
    if param.type.is_address:
        return [f"{ADDRESS_STRUCT}* {name}"]
    return [f"{c_type(param.type)} {name}"]


def output_declarations(param: Parameter) -> List[str]:
    """Outputs are written through pointers, one level deeper than inputs"""
    name = param.name
    if param.type.is_array:
        return [f"{c_type(param.type)}** {name}", f"size_t* {name}_sz"]
    if param.type.is_address:
        return [f"{ADDRESS_STRUCT}** {name}"]
    return [f"{c_type(param.type)}* {name}"]


def parameter_list(function: Function) -> List[str]:
    params = []
    for param in function.inputs:
        params.extend(input_declarations(param))
    for param in function.outputs:
        params.extend(output_declarations(param))
    return params


def encode_signature(contract_name: str, function: Function) -> str:
    """
    Caller-side prototype, prefixed with the target address and call options:

        MyContract_f(UniversalAddress *__address, QtumCallOptions* __options, uint8_t a, uint32_t* r)
    """
    params = list(CALL_OPTIONS) + parameter_list(function)
    return f"{qualified_name(contract_name, function)}({', '.join(params)})"


def decode_signature(contract_name: str, function: Function) -> str:
    """Prototype of the implementation the dispatcher calls"""
    params = parameter_list(function)
    return f"{qualified_name(contract_name, function)}({', '.join(params) or 'void'})"


def call_expression(contract_name: str, function: Function) -> str:
    """Dispatcher call of the implementation, passing outputs by address"""
    args = []
    for param in function.inputs:
        args.append(param.name)
        if param.type.is_array:
            args.append(f"{param.name}_sz")
    for param in function.outputs:
        args.append(f"&{param.name}")
        if param.type.is_array:
            args.append(f"&{param.name}_sz")
    return f"{qualified_name(contract_name, function)}({', '.join(args)});"
