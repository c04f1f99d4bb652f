import logging

import pytest

from memdb.config import StoreConfig
from memdb.diag import disable_log, enable_log, logger
from memdb.errors import ConfigError
from memdb.store import MemDB, mem_db


def test_defaults(clean_env):
    cfg = StoreConfig.from_env()
    assert cfg == StoreConfig(primary_key="id", equality="strict", unique_keys=False)


def test_from_env(clean_env):
    clean_env.setenv("MEMDB_PRIMARY_KEY", "uid")
    clean_env.setenv("MEMDB_EQUALITY", "LOOSE")
    clean_env.setenv("MEMDB_UNIQUE_KEYS", "yes")
    assert StoreConfig.from_env() == StoreConfig("uid", "loose", True)


def test_from_env_invalid_values_fall_back(clean_env, caplog):
    clean_env.setenv("MEMDB_PRIMARY_KEY", "  ")
    clean_env.setenv("MEMDB_EQUALITY", "fuzzy")
    clean_env.setenv("MEMDB_UNIQUE_KEYS", "maybe")
    with caplog.at_level(logging.WARNING, logger="memdb"):
        cfg = StoreConfig.from_env()
    assert cfg == StoreConfig()
    assert len(caplog.records) == 3


@pytest.mark.parametrize("kwargs", [{"primary_key": ""}, {"equality": "fuzzy"}])
def test_explicit_invalid_config(kwargs):
    with pytest.raises(ConfigError):
        mem_db(**kwargs)


def test_primary_key_argument_overrides_config():
    db = MemDB("sku", config=StoreConfig(equality="loose"))
    assert db.primary_key == "sku"
    assert db.config.equality == "loose"


def test_file_log(tmp_path):
    path = tmp_path / "memdb.log"
    assert enable_log(str(path)) == str(path)
    db = MemDB()
    db.insert("t", {"id": 1})
    db.get("t", 1)
    disable_log()
    text = path.read_text(encoding="utf-8")
    assert "INSERT t: 1 rows" in text
    assert "GET t: 1 of 1 rows matched" in text
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
