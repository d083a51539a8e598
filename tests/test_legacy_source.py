"""Tests de lectura de archivos JSON de la V1."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from legacy_source import LegacySource
from tests.helpers import write_legacy_files


def test_load_valid_file(tmp_path):
    write_legacy_files(tmp_path, {"tasks.json": [{"id": "t1"}]})

    load = LegacySource(tmp_path).load("tasks.json")

    assert load.error is None
    assert load.data == [{"id": "t1"}]


def test_missing_file_is_reported_not_raised(tmp_path):
    load = LegacySource(tmp_path).load("clients.json")

    assert load.data is None
    assert "no encontrado" in load.error


def test_invalid_json_is_reported_not_raised(tmp_path):
    write_legacy_files(tmp_path, {"schedule.json": "[{\"id\": "})

    load = LegacySource(tmp_path).load("schedule.json")

    assert load.data is None
    assert "JSON inválido" in load.error


def test_utf8_content(tmp_path):
    write_legacy_files(tmp_path, {"clients.json": [{"id": "c1", "name": "Café Ñandú"}]})

    assert LegacySource(tmp_path).load("clients.json").data[0]["name"] == "Café Ñandú"


def test_default_data_dir():
    assert LegacySource().data_dir == config.LEGACY_DATA_DIR
