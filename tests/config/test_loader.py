import json
from pathlib import Path

import pytest

from boardmirror.config import load_config
from boardmirror.contracts.exceptions import ConfigError


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_config_resolves_store_path_relative_to_config_dir(tmp_path: Path) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    config_path = _write(config_dir / "mirror.json", {"store_path": "data/boards.json", "max_concurrent": 4})

    config = load_config(config_path)

    assert config.store_path == (config_dir / "data" / "boards.json").resolve()
    assert config.max_concurrent == 4


def test_load_config_keeps_absolute_store_path(tmp_path: Path) -> None:
    store_path = tmp_path / "elsewhere" / "boards.json"
    config_path = _write(tmp_path / "mirror.json", {"store_path": str(store_path)})

    assert load_config(config_path).store_path == store_path


def test_load_config_reads_token_auth(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "mirror.json", {"auth": "token", "api_key": "k", "api_token": "t"})

    config = load_config(config_path)

    assert (config.auth, config.api_key, config.api_token) == ("token", "k", "t")


def test_load_config_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading"):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json_raises_config_error(tmp_path: Path) -> None:
    config_path = tmp_path / "mirror.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(config_path)


def test_load_config_invalid_values_raise_config_error(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "mirror.json", {"auth": "token"})

    with pytest.raises(ConfigError, match="invalid config"):
        load_config(config_path)
