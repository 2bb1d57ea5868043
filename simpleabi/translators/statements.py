"""
C statement bodies for the caller-side encoder and the callee-side dispatcher.

Both sides share the push/pop tables from core.config: whatever the encoder
pushes, the dispatcher pops with the matching primitive, and vice versa for
outputs.
"""

import textwrap
from typing import List

from ..core.config import (
    ADDRESS_STRUCT, ARRAY_POP_OP, ARRAY_PUSH_OP, POP_OP, PUSH_OP, SELECTOR_PUSH_OP
)
from ..core.models import Function, Parameter
from .signatures import c_type, call_expression, function_id


def indent_block(text: str, depth: int = 1) -> str:
    """Indent a block of text with tabs"""
    return textwrap.indent(text, "\t" * depth)


def push_statement(param: Parameter) -> str:
    """Push a parameter; arrays push their byte length along with the data"""
    name = param.name
    if param.type.is_array:
        return f"{ARRAY_PUSH_OP}({name}, {name}_sz * sizeof(*{name}));"
    if param.type.is_address:
        return f"{PUSH_OP[param.type.base]}({name}, sizeof({ADDRESS_STRUCT}));"
    return f"{PUSH_OP[param.type.base]}({name});"


def nonpayable_guard(value_expression: str) -> List[str]:
    return [
        f"if({value_expression} > 0) {{",
        '\tqtumError("nonpayable function");',
        "}",
    ]


def encode_body(contract_name: str, function: Function) -> str:
    """
    Body of the caller-side function: push inputs and the selector, call,
    then pop outputs into the caller's pointers on success.
    """
    lines = []
    if not function.payable:
        lines.extend(nonpayable_guard("__options->value"))

    for param in function.inputs:
        lines.append(push_statement(param))

    lines.append(f"{SELECTOR_PUSH_OP}({function_id(contract_name, function)});")
    lines.append("QtumCallResult r = qtumCall(__address, __options);")
    lines.append("if(r.error == QTUM_CALL_SUCCESS){")
    for param in function.outputs:
        lines.extend("\t" + line for line in _pop_output(param))
    lines.append("}")
    lines.append("return r;")
    return "\n".join(lines)


def _pop_output(param: Parameter) -> List[str]:
    name = param.name
    if param.type.is_array:
        # the peeked size is in bytes; convert to an element count afterwards
        return [
            f"*{name}_sz = qtumPeekSize();",
            f"*{name} = malloc(*{name}_sz);",
            f"{ARRAY_POP_OP}(*{name}, *{name}_sz);",
            f"*{name}_sz /= sizeof(**{name});",
        ]
    if param.type.is_address:
        return [
            f"if(*{name} == NULL){{",
            f"\t*{name} = malloc(sizeof({ADDRESS_STRUCT}));",
            "}",
            f"if(*{name} == NULL){{",
            "\tqtumErase();",
            "}else{",
            f"\t{POP_OP[param.type.base]}(*{name}, sizeof({ADDRESS_STRUCT}));",
            "}",
        ]
    return [f"*{name} = {POP_OP[param.type.base]};"]


def dispatch_body(contract_name: str, function: Function) -> str:
    """
    Body of one ``case`` of the dispatcher: pop inputs, declare outputs,
    call the implementation, push outputs back.
    """
    lines = []
    if not function.payable:
        lines.extend(nonpayable_guard("qtumExec->valueSent"))

    for param in function.inputs:
        lines.extend(_pop_input(param))

    for param in function.outputs:
        lines.extend(_declare_output(param))

    lines.append(call_expression(contract_name, function))

    for param in function.outputs:
        lines.append(push_statement(param))

    lines.append("break;")
    return "\n".join(lines)


def _pop_input(param: Parameter) -> List[str]:
    name = param.name
    if param.type.is_array:
        return [
            f"size_t {name}_sz = qtumPeekSize();",
            f"{c_type(param.type)}* {name} = malloc({name}_sz);",
            f"{ARRAY_POP_OP}({name}, {name}_sz);",
            f"{name}_sz /= sizeof(*{name});",
        ]
    if param.type.is_address:
        return [
            f"{ADDRESS_STRUCT}* {name} = malloc(sizeof({ADDRESS_STRUCT}));",
            f"{POP_OP[param.type.base]}({name}, sizeof({ADDRESS_STRUCT}));",
        ]
    return [f"{c_type(param.type)} {name} = {POP_OP[param.type.base]};"]


def _declare_output(param: Parameter) -> List[str]:
    name = param.name
    if param.type.is_array:
        return [f"{c_type(param.type)}* {name} = NULL;", f"size_t {name}_sz = 0;"]
    if param.type.is_address:
        return [f"{ADDRESS_STRUCT}* {name} = NULL;"]
    return [f"{c_type(param.type)} {name} = 0;"]
