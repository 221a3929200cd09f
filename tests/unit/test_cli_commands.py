import json
from pathlib import Path
import textwrap

from click.testing import CliRunner

from selkit.cli import cli


def write_multi_doc_yaml(tmp_path: Path) -> Path:
    y = textwrap.dedent(
        """
        name: link
        selector:
          - kind: element
            value: a
          - kind: attr
            value: 'href$=".png"'
          - kind: pseudo-class
            value: focus
        ---
        name: editable
        selector:
          - kind: id
            value: main
          - kind: class
            value: editable
        """
    )
    p = tmp_path / "demo.yaml"
    p.write_text(y, encoding="utf-8")
    return p


def test_cli_build_in_token_order():
    runner = CliRunner()
    result = runner.invoke(cli, ["build", "element=a", 'attr=href$=".png"', "pseudo-class=focus"])
    assert result.exit_code == 0
    assert result.output.strip() == 'a[href$=".png"]:focus'


def test_cli_build_order_violation():
    runner = CliRunner()
    result = runner.invoke(cli, ["build", "element=div", "attr=x", "class=y"])
    assert result.exit_code == 1
    assert result.output.startswith("ERR ")


def test_cli_build_bad_token_is_usage_error():
    runner = CliRunner()
    result = runner.invoke(cli, ["build", "element"])
    assert result.exit_code == 2
    result = runner.invoke(cli, ["build", "tag=div"])
    assert result.exit_code == 2


def test_cli_render_file_with_json_out(tmp_path: Path):
    wf = write_multi_doc_yaml(tmp_path)
    out = tmp_path / "out" / "selectors.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(wf), "--json-out", str(out)])
    assert result.exit_code == 0
    assert result.output.count("OK  ") == 2
    assert 'link: a[href$=".png"]:focus' in result.output

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [s["selector"] for s in data["selectors"]] == ['a[href$=".png"]:focus', "#main.editable"]


def test_cli_render_dir_reports_errors(tmp_path: Path):
    write_multi_doc_yaml(tmp_path)
    (tmp_path / "bad.yaml").write_text(
        "name: bad\nselector:\n  - {kind: pseudo_element, value: before}\n  - {kind: pseudo_element, value: after}\n",
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "--dir", str(tmp_path), "--no-recursive"])
    assert result.exit_code == 1
    assert result.output.count("OK  ") == 2
    assert "ERR " in result.output


def test_cli_render_nothing_to_do(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SELECTORS_DIR", str(tmp_path / "missing"))
    runner = CliRunner()
    result = runner.invoke(cli, ["render"])
    assert result.exit_code == 2


def test_cli_config_prints_settings(monkeypatch):
    monkeypatch.setenv("JSON_INDENT", "4")
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["JSON_INDENT"] == 4
    assert "LOG_LEVEL" in data


def test_cli_render_dir_target_honours_no_recursive(tmp_path: Path):
    write_multi_doc_yaml(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "deep.yaml").write_text("name: deep\nselector:\n  - {kind: element, value: td}\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["render", str(tmp_path), "--no-recursive"])
    assert result.exit_code == 0
    assert result.output.count("OK  ") == 2
    assert "deep.yaml" not in result.output

    result = runner.invoke(cli, ["render", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output.count("OK  ") == 3


def test_cli_json_out_uses_configured_indent(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("JSON_INDENT", "4")
    wf = write_multi_doc_yaml(tmp_path)
    out = tmp_path / "selectors.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(wf), "--json-out", str(out)])
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").startswith('{\n    "selectors"')
