"""
Tests for function selector derivation
"""

import pytest

from simpleabi.core.models import Function, Parameter, TypeTag
from simpleabi.parser import parse_function
from simpleabi.utils.hashing import canonical_signature, function_selector


def make_function(name="myFunction", inputs=("uint8", "int64"), outputs=("uint8", "int32")):
    return Function(
        name=name,
        inputs=tuple(Parameter(f"in{i}", TypeTag.parse(t)) for i, t in enumerate(inputs)),
        outputs=tuple(Parameter(f"out{i}", TypeTag.parse(t)) for i, t in enumerate(outputs)),
    )


def test_canonical_signature():
    assert canonical_signature("MyContract", make_function()) == \
        "uint8 int64 MyContract_myFunction -> uint8 int32"


def test_canonical_signature_without_parameters():
    fn = make_function(name="ping", inputs=(), outputs=())
    assert canonical_signature("C", fn) == "C_ping ->"


def test_golden_selectors():
    """Test exact selector values"""
    assert function_selector("MyContract", make_function()) == "0x996c38c3"

    other = make_function(name="otherFunction", inputs=("uint8",), outputs=("uint32",))
    assert function_selector("MyContract", other) == "0x01c66199"

    address = make_function(inputs=("uniaddress",), outputs=("uniaddress",))
    assert function_selector("MyContract", address) == "0x6985f0c9"


def test_selector_ignores_parameter_names():
    fn = parse_function("a:uint8 b:int64 myFunction:fn -> c:uint8 d:int32", 0)
    assert function_selector("MyContract", fn) == "0x996c38c3"


def test_selector_is_stable():
    """Test that parsing and hashing the same line twice gives the same selector"""
    line = "to:uniaddress amounts:uint64[] send:fn:payable -> ok:uint8"
    first = function_selector("Token", parse_function(line, 0))
    second = function_selector("Token", parse_function(line, 0))
    assert first == second
    assert first.startswith("0x")
    assert len(first) == 10


def test_selector_changes_with_every_field():
    golden = function_selector("MyContract", make_function())
    variants = [
        function_selector("OtherContract", make_function()),
        function_selector("MyContract", make_function(name="myFunction2")),
        function_selector("MyContract", make_function(inputs=("uint16", "int64"))),
        function_selector("MyContract", make_function(inputs=("uint8[]", "int64"))),
        function_selector("MyContract", make_function(outputs=("uint8", "int64"))),
        function_selector("MyContract", make_function(inputs=("int64", "uint8"))),
    ]
    assert golden not in variants
    assert len(set(variants)) == len(variants)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
