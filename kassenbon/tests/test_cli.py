"""Tests for the unified CLI entry point."""

from __future__ import annotations

import json

import pytest

from kassenbon.cli.main import main

KAUFLAND_TEXT = """Kaufland Bergsteig
Preis EUR
KLC.Milch 1,19 B
Wurst
3 * 1,50 4,50 B
Summe 5,69
01.02.2025 18:02
"""


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "parse" in capsys.readouterr().out


def test_parse_prints_summary(tmp_path, capsys) -> None:
    receipt_path = tmp_path / "kaufland.txt"
    receipt_path.write_text(KAUFLAND_TEXT, encoding="utf-8")

    assert main(["parse", str(receipt_path)]) == 0

    out = capsys.readouterr().out
    assert "Store: Kaufland" in out
    assert "Date: 2025-02-01" in out
    assert "Declared total: 5.69" in out


def test_parse_json_output(tmp_path, capsys) -> None:
    receipt_path = tmp_path / "kaufland.txt"
    receipt_path.write_text(KAUFLAND_TEXT, encoding="utf-8")

    assert main(["parse", str(receipt_path), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["store"] == "Kaufland"
    assert [item["name"] for item in data["items"]] == ["KLC.Milch", "Wurst"]
    assert data["items_total"] == "5.69"


def test_parse_json_row_table(tmp_path, capsys) -> None:
    receipt_path = tmp_path / "rows.json"
    receipt_path.write_text(
        json.dumps({"0": ["LIDL"], "1": ["EUR"], "2": ["Butter", "1,99"], "3": ["SUMME", "1,99"]}),
        encoding="utf-8",
    )

    assert main(["parse", str(receipt_path), "--json"]) == 0

    assert json.loads(capsys.readouterr().out)["store"] == "Lidl"


@pytest.mark.parametrize("payload", ['{"0": null}', '{"0": 5}', '["LIDL"]', "{not json"])
def test_parse_malformed_row_table_exits_with_error(tmp_path, capsys, payload: str) -> None:
    receipt_path = tmp_path / "rows.json"
    receipt_path.write_text(payload, encoding="utf-8")

    assert main(["parse", str(receipt_path)]) == 1
    assert "Invalid row table" in capsys.readouterr().out


def test_parse_missing_file(tmp_path, capsys) -> None:
    assert main(["parse", str(tmp_path / "missing.txt")]) == 1
    assert "not found" in capsys.readouterr().out


def test_parse_unprocessable(tmp_path, capsys) -> None:
    receipt_path = tmp_path / "broken.txt"
    receipt_path.write_text("Hallo\nPreis EUR\n", encoding="utf-8")

    assert main(["parse", str(receipt_path)]) == 1
    assert "Unprocessable" in capsys.readouterr().out


def test_parse_no_items_suggests_vendor_flag(tmp_path, capsys) -> None:
    receipt_path = tmp_path / "empty.txt"
    receipt_path.write_text("EUR\nVielen Dank\nSUMME 0,00\n", encoding="utf-8")

    assert main(["parse", str(receipt_path)]) == 1
    assert "--vendor" in capsys.readouterr().out


def test_parse_stdin(monkeypatch, capsys) -> None:
    import io

    monkeypatch.setattr("sys.stdin", io.StringIO(KAUFLAND_TEXT))

    assert main(["parse", "-", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["declared_sum"] == "5.69"


def test_categorize(capsys) -> None:
    assert main(["categorize", "KLC.Bananen", "Zucchini"]) == 0

    out = capsys.readouterr().out
    assert "KLC.Bananen: Obst" in out
    assert "Zucchini: Gemüse" in out


def test_vendors_lists_registry(capsys) -> None:
    assert main(["vendors"]) == 0

    out = capsys.readouterr().out
    assert "Kaufland (fallback): grammar=name_detail" in out
    assert "Netto: grammar=quantity_marker" in out


@pytest.mark.parametrize("argv", [["parse"], ["categorize"]])
def test_missing_arguments_exit_with_usage_error(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
