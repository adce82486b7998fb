"""Tests for the non-interactive command line modes"""

import json

import pytest

from pacdex import cli, config


def desc(name, reason="0", depends=()):
    text = f"%NAME%\n{name}\n\n%VERSION%\n1.0-1\n\n%DESC%\n{name} package\n\n%SIZE%\n1000\n\n%REASON%\n{reason}\n"
    if depends:
        text += "\n%DEPENDS%\n" + "\n".join(depends) + "\n"
    return text


@pytest.fixture(autouse=True)
def settings_file(monkeypatch, tmp_path):
    path = tmp_path / "config" / "settings.json"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    return path


@pytest.fixture
def local_db(tmp_path):
    root = tmp_path / "local"
    root.mkdir()
    for dirname, contents in {
        "bash-1.0-1": desc("bash", depends=["glibc"]),
        "glibc-1.0-1": desc("glibc", reason="1"),
        "vim-1.0-1": desc("vim", depends=["glibc", "gpm"]),
    }.items():
        (root / dirname).mkdir()
        (root / dirname / "desc").write_text(contents)
    return root


def test_package_details(local_db, capsys):
    assert cli.main(["--dbpath", str(local_db), "glibc"]) == 0
    out = capsys.readouterr().out
    assert "glibc" in out
    assert "glibc package" in out
    assert "dependency" in out
    assert "$accent" not in out


def test_unknown_package(local_db, capsys):
    assert cli.main(["--dbpath", str(local_db), "emacs"]) == 1
    assert "not found" in capsys.readouterr().out


def test_list_explicit_only_by_default(local_db, capsys):
    assert cli.main(["--dbpath", str(local_db), "--list"]) == 0
    out = capsys.readouterr().out
    assert "bash" in out
    assert "vim" in out
    assert "glibc" not in out


def test_list_all_with_limit(local_db, capsys):
    assert cli.main(["--dbpath", str(local_db), "--list", "--all", "--limit", "1"]) == 0
    out = capsys.readouterr().out
    assert "1 packages" in out
    assert "bash" in out
    assert "vim" not in out


def test_empty_database(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert cli.main(["--dbpath", str(empty), "--list"]) == 1
    assert "No installed packages" in capsys.readouterr().out


def test_unreadable_database(tmp_path, capsys):
    assert cli.main(["--dbpath", str(tmp_path / "missing"), "--list"]) == 1
    assert "Could not read installed packages" in capsys.readouterr().out


def test_write_config(settings_file, capsys):
    assert cli.main(["--write-config", "--sort", "size", "--all"]) == 0
    saved = json.loads(settings_file.read_text())
    assert saved["sort_mode"] == "size"
    assert saved["explicit_only"] is False


def test_translate_textual_markup():
    translated = cli.translate_textual_to_rich_markup("[b $text-muted]x[/] [$text]y[/$text]")
    assert translated == "[b grey50]x[/] [default]y[/default]"


def test_bad_sort_choice(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--sort", "votes"])
