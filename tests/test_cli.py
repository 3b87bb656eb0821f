# tests/test_cli.py
import json

import pytest

from steamcalc import cli
from steamcalc.asset_cache import runtime as runtime_module


def test_calc_prints_result(capsys):
    assert cli.main(["calc", "--temp", "500", "--pressure", "100"]) == 0
    out = capsys.readouterr().out
    assert "1281.3 BTU/lb" in out
    assert "Superheated" in out


def test_calc_rejects_non_numeric_input(capsys):
    assert cli.main(["calc", "--temp", "abc", "--pressure", "100"]) == 2
    assert "Please enter valid numbers for both fields." in capsys.readouterr().err


def test_calc_writes_json_and_excel(tmp_path, capsys):
    json_path = tmp_path / "result.json"
    xlsx_path = tmp_path / "result.xlsx"
    code = cli.main(
        ["calc", "--temp", "300", "--pressure", "200", "--si", "--json", str(json_path), "--xlsx", str(xlsx_path)]
    )
    assert code == 0
    assert json.loads(json_path.read_text(encoding="utf-8"))["enthalpy_BTU_per_lb"] == pytest.approx(270.0)
    assert xlsx_path.exists()
    assert "Warning:" in capsys.readouterr().out


def test_bad_config_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")
    assert cli.main(["--config", str(path), "calc", "--temp", "1", "--pressure", "1"]) == 2
    assert "error:" in capsys.readouterr().err


def test_assets_list_on_empty_directory(tmp_path, capsys):
    assert cli.main(["assets", "list", "--cache-dir", str(tmp_path)]) == 0
    assert "No cache stores." in capsys.readouterr().out


def test_assets_sync_requires_origin(tmp_path, capsys):
    assert cli.main(["assets", "sync", "--cache-dir", str(tmp_path)]) == 2
    assert "no asset origin" in capsys.readouterr().err


@pytest.fixture
def offline_capable(monkeypatch, network):
    monkeypatch.setattr(runtime_module.httpx, "AsyncHTTPTransport", lambda: network.transport)
    return network


def test_assets_sync_get_and_list(tmp_path, capsys, offline_capable, scope):
    cache_dir = str(tmp_path)

    assert cli.main(["assets", "sync", "--origin", scope, "--cache-dir", cache_dir]) == 0
    assert "Active cache: steamcalc-v1 (7 entries)" in capsys.readouterr().out

    offline_capable.online = False
    out_file = tmp_path / "styles.css"
    assert cli.main(["assets", "get", "./styles.css", "--origin", scope, "--cache-dir", cache_dir, "--out", str(out_file)]) == 0
    assert out_file.read_bytes() == b"body { color: #1d3557; }"

    assert cli.main(["assets", "list", "--cache-dir", cache_dir]) == 0
    listing = capsys.readouterr().out
    assert "* steamcalc-v1 (7 entries)" in listing
    assert f"GET {scope}index.html [200, 18 bytes]" in listing


def test_assets_sync_reports_install_failure(tmp_path, capsys, offline_capable, scope):
    offline_capable.online = False
    assert cli.main(["assets", "sync", "--origin", scope, "--cache-dir", str(tmp_path)]) == 1
    assert "install failed" in capsys.readouterr().err
    assert not any(tmp_path.iterdir())


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("steamcalc ")
