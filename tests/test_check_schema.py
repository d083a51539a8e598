"""Tests de check_schema.py (verificación de tablas, sin escrituras)."""

import io
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import check_schema
import config
from tests.helpers import InMemoryDestination


def test_unreachable_destination_prints_manual_steps():
    destination = InMemoryDestination(unreachable=True)
    out = io.StringIO()

    assert check_schema.check_connection(destination, out=out) is False

    text = out.getvalue()
    assert "connection refused" in text
    assert "dbsetup.py --print-sql" in text
    assert destination.reads == []
    assert destination.calls == []


def test_reachable_destination():
    out = io.StringIO()
    assert check_schema.check_connection(InMemoryDestination(), out=out) is True
    assert "Conexión exitosa" in out.getvalue()


def test_check_tables_reports_exists_and_not_found():
    existing = ["clients", "projects", "tasks"]
    destination = InMemoryDestination(tables=existing)
    destination.tables["clients"]["c1"] = {"id": "c1"}
    out = io.StringIO()

    status = check_schema.check_tables(destination, out=out)
    text = out.getvalue()

    assert set(status) == set(config.VERIFY_TABLES)
    assert [t for t, ok in status.items() if ok] == existing
    assert "clients: EXISTS (1 filas leídas)" in text
    assert "revenue: NOT FOUND" in text
    # Solo lecturas
    assert destination.calls == []
    assert destination.reads == config.VERIFY_TABLES


def test_main_without_credentials(monkeypatch, capsys):
    monkeypatch.setattr(config, "DESTINATION_BACKEND", "postgres")
    monkeypatch.setattr(config, "POSTGRES_CONFIG", {**config.POSTGRES_CONFIG, "dbname": "", "user": ""})

    assert check_schema.main() == 1
    assert "POSTGRES_DB" in capsys.readouterr().err


def test_main_with_fake_destination(monkeypatch, capsys):
    destination = InMemoryDestination()
    monkeypatch.setattr(config, "DESTINATION_BACKEND", "supabase")
    monkeypatch.setattr(config, "SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setattr(check_schema, "connect_destination", lambda: destination)

    assert check_schema.main() == 0
    assert destination.closed
    assert "PASOS MANUALES" in capsys.readouterr().out
