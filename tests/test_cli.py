from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

import contractgen.cli.generate as cli_mod
from contractgen.common.schema import ServiceResponse


class _FakeService:
    requests: list[tuple[str, Any]] = []

    def __init__(self, settings: Any) -> None:
        self.settings = settings

    async def handle(self, method: str, body: Any = None) -> ServiceResponse:
        self.requests.append((method, body))
        if body["params"].get("name") == "fail":
            return ServiceResponse.error(500, "API key not configured")
        return ServiceResponse(200, {"success": True, "code": "contract Foo {}"})


@pytest.fixture(autouse=True)
def _fake_service(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_mod, "ContractPromptService", _FakeService)
    monkeypatch.setattr(_FakeService, "requests", [])


def test_parse_params() -> None:
    assert cli_mod.parse_params(["name=Foo", "supply=1000", "description=a=b"]) == {
        "name": "Foo",
        "supply": "1000",
        "description": "a=b",
    }


def test_generate_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_mod.main(["--type", "token", "--param", "name=Foo", "--param", "symbol=FOO", "--param", "supply=1"])
    assert rc == 0
    assert "contract Foo {}" in capsys.readouterr().out
    assert _FakeService.requests == [
        ("POST", {"type": "token", "params": {"name": "Foo", "symbol": "FOO", "supply": "1"}})
    ]


def test_generate_to_file(tmp_path: Path) -> None:
    out = tmp_path / "Foo.sol"
    rc = cli_mod.main(["--type", "voting", "--param", "name=Council", "--out", str(out)])
    assert rc == 0
    assert out.read_text(encoding="utf-8") == "contract Foo {}\n"


def test_failure_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli_mod.main(["--type", "voting", "--param", "name=fail"])
    assert rc == 1
    assert "API key not configured" in capsys.readouterr().err


def test_bad_param_is_usage_error() -> None:
    with pytest.raises(SystemExit):
        cli_mod.main(["--type", "token", "--param", "name"])
