import json

from main import main, parse_seed


def test_parse_seed():
    assert parse_seed(None) is None
    assert parse_seed("12") == 12
    assert parse_seed("alpha") == "alpha"


def test_main_exports(tmp_path, capsys):
    out_json = tmp_path / "tiles.json"
    out_xml = tmp_path / "tiles.xml"
    code = main(["--seed", "5", "--radius", "1", "--export-json", str(out_json), "--export-xml", str(out_xml)])
    assert code == 0
    assert len(json.loads(out_json.read_text())) == 7
    assert out_xml.exists()
    assert "Seed 5: 7 tiles" in capsys.readouterr().out


def test_main_bad_config(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[")
    assert main(["--config", str(bad)]) == 1
