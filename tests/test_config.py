import json

from pacdex import config
from pacdex.config import Settings, load_settings, save_settings
from pacdex.models import SortMode


def test_defaults_without_file(tmp_path):
    settings = load_settings(tmp_path / "settings.json")
    assert settings == Settings()
    assert settings.local_db_path == "/var/lib/pacman/local"
    assert settings.explicit_only is True
    assert settings.sort_mode is SortMode.ALPHABETICAL


def test_values_are_loaded(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "local_db_path": "/tmp/local",
                "page_size": 25,
                "sort_mode": "size",
                "explicit_only": False,
                "include_optional": False,
                "show_help": False,
                "theme": "gruvbox",
            }
        )
    )
    settings = load_settings(path)
    assert settings.local_db_path == "/tmp/local"
    assert settings.page_size == 25
    assert settings.sort_mode is SortMode.SIZE_DESCENDING
    assert settings.explicit_only is False
    assert settings.include_optional is False
    assert settings.show_help is False
    assert settings.theme == "gruvbox"


def test_invalid_values_fall_back_per_key(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"page_size": 0, "sort_mode": "votes", "show_help": "yes", "theme": "x", "colour": 1})
    )
    settings = load_settings(path)
    assert settings.page_size == Settings().page_size
    assert settings.sort_mode is SortMode.ALPHABETICAL
    assert settings.show_help is True
    assert settings.theme == "x"
    assert "Unknown setting 'colour'" in caplog.text


def test_malformed_json(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(path) == Settings()
    assert "Could not read settings" in caplog.text


def test_non_object_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")
    assert load_settings(path) == Settings()


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    save_settings(Settings(page_size=5, sort_mode=SortMode.SIZE_DESCENDING), path)
    assert json.loads(path.read_text())["sort_mode"] == "size"
    assert load_settings(path).page_size == 5


def test_default_location(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "settings.json")
    save_settings(Settings(theme="dracula"))
    assert load_settings().theme == "dracula"
