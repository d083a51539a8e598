"""
Test de validación para config.py.

Verifica que:
- Configuración carga correctamente
- Funciones helper levantan KeyError con las entidades disponibles
- Manejo de errores es apropiado
"""

import os
import sys

import pytest

# === RESOLUCIÓN DE PATH ===
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config

REQUIRED_KEYS = [
    "source_file",
    "table",
    "conflict_key",
    "chunk_size",
    "singleton",
    "derived_from",
    "description",
]


def test_get_entity_config():
    """Todas las entidades tienen configuración completa y bien tipada."""
    errors = []

    for entity_name in config.ENTITIES:
        cfg = config.get_entity_config(entity_name)

        for key in REQUIRED_KEYS:
            if key not in cfg:
                errors.append(f"{entity_name}: Falta key '{key}'")

        if not isinstance(cfg.get("table"), str):
            errors.append(f"{entity_name}: table debe ser string")

        if cfg.get("derived_from") is None and not cfg.get("source_file"):
            errors.append(f"{entity_name}: sin source_file ni derived_from")

    assert not errors, f"Errores en configuración: {errors}"
    print(f"✅ Todas las {len(config.ENTITIES)} entidades tienen configuración válida")


def test_only_activity_log_is_chunked():
    chunked = {
        name: cfg["chunk_size"] for name, cfg in config.ENTITIES.items() if cfg["chunk_size"]
    }
    assert chunked == {"activity_log": 1000}


def test_singletons():
    assert config.is_singleton("analytics")
    assert config.is_singleton("achievements")
    assert not config.is_singleton("clients")
    assert config.SINGLETON_ID == "singleton"


def test_projects_derive_from_clients():
    assert config.get_derived_entities("clients") == ["projects"]
    assert config.get_entity_config("projects")["source_file"] is None
    assert "projects" not in config.MIGRATION_ORDER


def test_migration_order_completeness():
    """Toda entidad con archivo propio está en MIGRATION_ORDER (y solo esas)."""
    with_source = {n for n, cfg in config.ENTITIES.items() if cfg["source_file"]}
    assert set(config.MIGRATION_ORDER) == with_source
    assert config.MIGRATION_ORDER[0] == "clients"


def test_verify_tables_cover_all_entities():
    assert len(config.VERIFY_TABLES) == 9
    assert set(config.VERIFY_TABLES) == {c["table"] for c in config.ENTITIES.values()}


def test_error_handling():
    with pytest.raises(KeyError) as exc_info:
        config.get_entity_config("entidad_inexistente")

    assert "entidad_inexistente" in str(exc_info.value)
    assert "disponibles" in str(exc_info.value).lower()


def test_missing_credentials_supabase(monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "")

    assert config.get_missing_credentials("supabase") == ["SUPABASE_SERVICE_KEY"]


def test_missing_credentials_postgres(monkeypatch):
    monkeypatch.setattr(
        config, "POSTGRES_CONFIG", {**config.POSTGRES_CONFIG, "dbname": "", "user": "kanban"}
    )

    assert config.get_missing_credentials("postgres") == ["POSTGRES_DB"]


def test_unknown_backend_is_config_error():
    with pytest.raises(config.ConfigError):
        config.get_missing_credentials("mysql")
