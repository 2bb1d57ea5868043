"""
Integration tests for the generation pipeline and the command line tool
"""

from pathlib import Path

import pytest

from simpleabi import generate
from simpleabi.cli import main
from simpleabi.core.config import HTTP_TIMEOUT_ENV
from simpleabi.core.errors import ParseError, UsageError
from simpleabi.utils.files import save_artifacts

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"
AIRDROP = EXAMPLES / "AirDropToken.abi"


def test_generate_example():
    """Test the bundled example, including its implemented interfaces"""
    result = generate(str(AIRDROP))

    interface = result["interface"]
    assert interface.name == "AirDropToken"
    assert [fn.name for fn in interface.functions] == [
        "balanceOf", "transfer", "airdrop", "buy",
        "owner", "transferOwnership", "paused", "pause",
    ]
    assert interface.get("buy").payable

    artifacts = result["artifacts"]
    assert sorted(artifacts) == [
        "AirDropTokenABI.c", "AirDropTokenABI.h",
        "AirDropTokenDispatcher.c", "AirDropTokenDispatcher.h",
    ]
    assert "case ID_AirDropToken_transferOwnership:" in artifacts["AirDropTokenDispatcher.c"]


def test_generate_is_deterministic():
    assert generate(str(AIRDROP))["artifacts"] == generate(str(AIRDROP))["artifacts"]


def test_generate_requires_a_side():
    with pytest.raises(UsageError):
        generate(str(AIRDROP), encode=False, decode=False)


def test_generate_reports_parse_errors(tmp_path):
    bad = tmp_path / "Bad.abi"
    bad.write_text(":name=Bad\nx:uint18 f:fn -> void\n", encoding="utf-8")
    with pytest.raises(ParseError, match="received uint18"):
        generate(str(bad))


def test_save_artifacts(tmp_path):
    out = tmp_path / "build"
    paths = save_artifacts({"AABI.c": "int x;\n", "AABI.h": "\n"}, str(out))
    assert paths == [str(out / "AABI.c"), str(out / "AABI.h")]
    assert (out / "AABI.c").read_text(encoding="utf-8") == "int x;\n"


def test_cli_encode_and_decode(tmp_path):
    code = main(["-a", str(AIRDROP), "-e", "-d", "-o", str(tmp_path)])
    assert code == 0
    for name in ("AirDropTokenABI.c", "AirDropTokenABI.h",
                 "AirDropTokenDispatcher.c", "AirDropTokenDispatcher.h"):
        assert (tmp_path / name).exists()


def test_cli_encode_only(tmp_path):
    assert main(["-a", str(AIRDROP), "-e", "-o", str(tmp_path)]) == 0
    assert (tmp_path / "AirDropTokenABI.c").exists()
    assert not (tmp_path / "AirDropTokenDispatcher.c").exists()


def test_cli_usage_errors(tmp_path, capsys):
    assert main(["-a", str(AIRDROP), "-o", str(tmp_path)]) == 1
    assert "Must select one of encode or decode" in capsys.readouterr().err

    assert main(["-a", str(AIRDROP), "-e", "-l", "go", "-o", str(tmp_path)]) == 1
    assert main(["-a", str(tmp_path / "Missing.abi"), "-e", "-o", str(tmp_path)]) == 1

    wrong = tmp_path / "Token.txt"
    wrong.write_text(":name=T\n", encoding="utf-8")
    assert main(["-a", str(wrong), "-e", "-o", str(tmp_path)]) == 1
    assert "Expected file extension .abi" in capsys.readouterr().err


def test_cli_parse_error(tmp_path, capsys):
    bad = tmp_path / "Bad.abi"
    bad.write_text("name=Bad\n", encoding="utf-8")
    assert main(["-a", str(bad), "-e", "-o", str(tmp_path)]) == 1
    assert 'Expected ":" at line 0' in capsys.readouterr().err


def test_cli_bad_timeout_env(tmp_path, monkeypatch):
    monkeypatch.setenv(HTTP_TIMEOUT_ENV, "soon")
    assert main(["-a", str(AIRDROP), "-e", "-o", str(tmp_path)]) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
