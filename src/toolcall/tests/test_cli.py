"""Tests for the toolcall command line."""

from __future__ import annotations

import orjson
import pytest

from toolcall.cli.main import main
from toolcall.foundation.testing import MockBackend


def test_invoke_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["invoke", "divide", "[10, 2]"]) == 0
    assert capsys.readouterr().out.strip() == "Result: [5.0]"


def test_invoke_domain_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["invoke", "divide", "[10, 0]"]) == 1
    assert capsys.readouterr().out.strip() == "Error: division by zero is not allowed"


def test_invoke_type_mismatch(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["invoke", "divide", '[10, "2"]']) == 1
    assert capsys.readouterr().out.strip() == "Error: argument 2: expected float, got str"


@pytest.mark.parametrize("raw", ["{", '{"a": 1}'])
def test_invoke_bad_json(capsys: pytest.CaptureFixture[str], raw: str) -> None:
    assert main(["invoke", "divide", raw]) == 2
    assert "Error" in capsys.readouterr().err


def test_tools_text(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["tools"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("=== Combined Function Prompts ===")
    assert "--- Function: sum_all ---" in out


def test_tools_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["tools", "--json"]) == 0
    docs = orjson.loads(capsys.readouterr().out)
    assert len(docs) == 14
    assert docs[0]["function_name"] == "add"
    assert "return" in docs[0]


def test_help_topics(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["help"]) == 0
    assert "generation" in capsys.readouterr().out
    assert main(["help", "generation"]) == 0
    assert "TOPIC: generation" in capsys.readouterr().out
    assert main(["help", "nope"]) == 1


def test_ask_with_mock_backend(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    backend = MockBackend.replying('{"function": "divide", "arguments": [4, 2]}')
    monkeypatch.setattr("toolcall.runtime.generation.OllamaBackend", lambda model=None: backend)

    assert main(["ask", "divide 4 by 2", "--quiet"]) == 0
    assert capsys.readouterr().out.strip() == "Result: [2.0]"
    assert backend.call_count == 1


def test_ask_reports_decode_stage(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    backend = MockBackend.replying("no idea")
    monkeypatch.setattr("toolcall.runtime.generation.OllamaBackend", lambda model=None: backend)

    assert main(["ask", "divide 4 by 2"]) == 2
    captured = capsys.readouterr()
    assert "no idea" in captured.out
    assert "Error (decode):" in captured.err
