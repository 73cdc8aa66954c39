import json

from typer.testing import CliRunner

from morphseg.cli import app

from conftest import write_dict

runner = CliRunner()

ROWS = [
    "can,0,0,300,auxiliary,*,*,*,*,*,*,*,kan,*,*",
    "not,0,0,300,auxiliary,*,*,*,*,*,*,*,not,*,*",
    "cannot,0,0,400,auxiliary,*,*,*,*,*,*,*,kannot,0/1,*",
]


def test_analyze_json(tmp_path):
    root = write_dict(tmp_path / "mini", ROWS)
    result = runner.invoke(app, ["analyze", "cannot!", "--dict-dir", str(root), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [d["surface"] for d in data] == ["cannot", "!"]
    assert data[0]["reading_form"] == "kannot"
    assert data[1]["is_oov"] is True


def test_analyze_fine_mode(tmp_path):
    root = write_dict(tmp_path / "mini", ROWS)
    result = runner.invoke(app, ["analyze", "cannot", "--dict-dir", str(root), "--mode", "a", "--json"])
    assert result.exit_code == 0, result.output
    assert [d["surface"] for d in json.loads(result.output)] == ["can", "not"]


def test_analyze_table_output(tmp_path):
    root = write_dict(tmp_path / "mini", ROWS)
    result = runner.invoke(app, ["analyze", "cannot", "--dict-dir", str(root)])
    assert result.exit_code == 0, result.output
    assert "cannot" in result.output
    assert "auxiliary" in result.output


def test_analyze_missing_dictionary(tmp_path):
    result = runner.invoke(app, ["analyze", "x", "--dict-dir", str(tmp_path / "none")])
    assert result.exit_code == 1
    assert "missing" in result.output


def test_serve_missing_dictionary(tmp_path):
    result = runner.invoke(app, ["serve", "--dict-dir", str(tmp_path / "none")])
    assert result.exit_code == 1
    assert "missing" in result.output
