import json

import pytest
from pydantic import ValidationError

from htmlplain.config.schema import ParserConfig, Settings


def test_settings_defaults():
    s = Settings()
    assert s.parser.name == "html.parser"


def test_parser_config_accepts_lxml():
    assert ParserConfig(name="lxml").name == "lxml"


def test_parser_config_rejects_unknown_parser():
    with pytest.raises(ValidationError):
        ParserConfig(name="html5lib")


def test_settings_load_missing_file_uses_defaults(tmp_path):
    s = Settings.load(tmp_path / "nope.json")
    assert s == Settings()


def test_settings_loads_json(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"parser": {"name": "lxml"}}))
    assert Settings.load(config_file).parser.name == "lxml"


def test_settings_loads_empty_object(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{}")
    assert Settings.load(config_file).parser.name == "html.parser"


def test_settings_save_and_reload(tmp_path):
    path = tmp_path / "nested" / "config.json"
    s = Settings(parser=ParserConfig(name="lxml"))
    s.save(path)
    assert json.loads(path.read_text())["parser"]["name"] == "lxml"
    assert Settings.load(path) == s
