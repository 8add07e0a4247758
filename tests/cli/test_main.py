import json
from pathlib import Path

import pytest

from browscap_json_cache.cli.main import main


def _run(cache_dir: Path, *args: str) -> int:
    return main(["--dir", str(cache_dir), *args])


def test_set_and_get(tmp_path: Path, capsys):
    assert _run(tmp_path, "--no-version", "set", "browscap.version", "6001008") == 0
    assert _run(tmp_path, "set", "browscap.patterns", '{"a": "b/c"}') == 0
    capsys.readouterr()

    assert _run(tmp_path, "get", "browscap.patterns") == 0
    assert json.loads(capsys.readouterr().out) == {"a": "b/c"}
    assert (tmp_path / "browscap.patterns.6001008.json").exists()


def test_get_missing_key(tmp_path: Path, capsys):
    assert _run(tmp_path, "get", "absent") == 1
    assert "Key not found" in capsys.readouterr().err


def test_set_rejects_invalid_json(tmp_path: Path, capsys):
    assert _run(tmp_path, "set", "key", "not-json") == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_raw_mode_reads_documents_as_stored(tmp_path: Path, capsys):
    assert _run(tmp_path, "--no-version", "set", "browscap.type", '"FULL"') == 0
    capsys.readouterr()
    assert _run(tmp_path, "--raw", "get", "browscap.type") == 0
    assert json.loads(capsys.readouterr().out) == {"content": "FULL"}


def test_has_and_remove(tmp_path: Path, capsys):
    assert _run(tmp_path, "--raw", "has", "key") == 1
    assert capsys.readouterr().out.strip() == "false"
    assert _run(tmp_path, "--raw", "set", "key", "[1, 2]") == 0
    assert _run(tmp_path, "--raw", "has", "key") == 0
    assert _run(tmp_path, "--raw", "remove", "key") == 0
    assert _run(tmp_path, "--raw", "remove", "key") == 1


def test_info(tmp_path: Path, capsys):
    for key, value in (
        ("browscap.version", "6001008"),
        ("browscap.releaseDate", '"Mon, 06 Jan 2025"'),
    ):
        assert _run(tmp_path, "--no-version", "set", key, value) == 0
    capsys.readouterr()

    assert _run(tmp_path, "info") == 0
    assert json.loads(capsys.readouterr().out) == {
        "version": 6001008,
        "release_date": "Mon, 06 Jan 2025",
        "type": None,
    }


def test_flush(tmp_path: Path):
    cache_dir = tmp_path / "cache"
    assert _run(cache_dir, "--raw", "set", "key", "1") == 0
    assert _run(cache_dir, "flush") == 0
    assert not cache_dir.exists()


def test_uses_environment_directory(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("BROWSCAP_CACHE_DIR", str(tmp_path))
    blank_env = tmp_path / "blank.env"
    blank_env.write_text("")
    monkeypatch.setenv("BROWSCAP_DOTENV_PATH", str(blank_env))
    assert main(["--raw", "set", "key", "true"]) == 0
    assert (tmp_path / "key.json").read_text(encoding="utf-8") == "true\n"


def test_configuration_error_exit_code(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["info"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_raw_and_no_version_are_exclusive(tmp_path: Path):
    with pytest.raises(SystemExit):
        _run(tmp_path, "--raw", "--no-version", "get", "key")


def test_empty_dir_is_rejected(tmp_path: Path, monkeypatch, capsys):
    keep = tmp_path / "keep.txt"
    keep.write_text("keep")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main(["--dir", "", "flush"])
    assert excinfo.value.code == 2
    assert "must not be empty" in capsys.readouterr().err
    assert keep.exists()


def test_invalid_expiration_is_a_configuration_error(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BROWSCAP_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("BROWSCAP_CACHE_EXPIRATION", "never")
    assert main(["info"]) == 2
    assert "Configuration error" in capsys.readouterr().err
