"""
Test de integridad de schemas.

Valida que:
1. Las columnas que produce cada migrador existen en dbsetup.SCHEMA
2. Coinciden con el tipo de registro (TypedDict) de migrators/records.py
3. Los nombres de tablas y columnas siguen snake_case
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
import dbsetup
from migrators.clients import PROJECT_FIELDS
from migrators.records import RECORD_TYPES
from tests.helpers import get_all_migrator_instances


def _field_tables():
    """Tabla destino → tupla de Field que la produce."""
    tables = {m.table: m.FIELDS for _, m in get_all_migrator_instances()}
    tables["projects"] = PROJECT_FIELDS
    return tables


def test_every_table_has_fields_schema_and_record_type():
    tables = set(config.VERIFY_TABLES)

    assert set(_field_tables()) == tables
    assert set(dbsetup.SCHEMA) == tables
    assert set(RECORD_TYPES) == tables


def test_fields_match_dbsetup_columns():
    errors = []

    for table, fields in _field_tables().items():
        produced = [f.column for f in fields]
        expected = dbsetup.get_table_columns(table)
        if sorted(produced) != sorted(expected):
            missing = set(expected) - set(produced)
            extra = set(produced) - set(expected)
            errors.append(f"{table}: faltan {missing}, sobran {extra}")
        print(f"   ✅ {table}: {len(produced)} columnas")

    assert not errors, errors


def test_fields_match_record_types():
    for table, fields in _field_tables().items():
        annotated = set(RECORD_TYPES[table].__annotations__)
        assert {f.column for f in fields} == annotated, table


def test_snake_case_naming():
    for table, columns in dbsetup.SCHEMA.items():
        assert table.replace("_", "").islower(), table
        for column, _ in columns:
            assert column.replace("_", "").isalpha() and column.islower(), f"{table}.{column}"


def test_every_table_has_text_primary_key_id():
    for table in dbsetup.SCHEMA:
        column, definition = dbsetup.SCHEMA[table][0]
        assert column == "id"
        assert definition == "TEXT PRIMARY KEY"


def test_projects_created_after_clients():
    order = list(dbsetup.SCHEMA)
    assert order.index("clients") < order.index("projects")


def test_schema_sql_contains_every_table():
    script = dbsetup.build_schema_sql()

    for table in config.VERIFY_TABLES:
        assert f"CREATE TABLE IF NOT EXISTS {table} (" in script
    assert "REFERENCES clients(id)" in script
