"""
Funciones helper compartidas para todos los tests.

Proporciona:
- Carga dinámica de migradores basándose en config.py (sin imports hardcodeados)
- InMemoryDestination: destino falso en memoria (sin red ni base de datos)
- write_legacy_files: arma un directorio de datos V1 en un tmp_path
"""

import copy
import importlib
import json
import os
import sys

# Agregar directorio raíz al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from destinations import Destination, DestinationError

FIXED_TIMESTAMP = "2026-01-01T00:00:00+00:00"


def get_migrator_class_for_entity(entity_name):
    """
    Carga dinámicamente la clase migrador para una entidad.

    Sigue la convención de nombres:
    - clients → ClientsMigrator (en migrators/clients.py)
    - activity_log → ActivityLogMigrator (en migrators/activity_log.py)

    Raises:
        ImportError: Si no existe el módulo
        AttributeError: Si no existe la clase
    """
    class_name = "".join(word.capitalize() for word in entity_name.split("_")) + "Migrator"
    module = importlib.import_module(f"migrators.{entity_name}")
    return getattr(module, class_name)


def get_all_migrator_classes():
    """
    Retorna lista de tuplas (nombre_clase, clase) para config.MIGRATION_ORDER.
    """
    return [
        (cls.__name__, cls)
        for cls in (get_migrator_class_for_entity(e) for e in config.MIGRATION_ORDER)
    ]


def get_all_migrator_instances(timestamp=FIXED_TIMESTAMP):
    """
    Retorna lista de tuplas (nombre_clase, instancia) con timestamp fijo.
    """
    return [(name, cls(timestamp=timestamp)) for name, cls in get_all_migrator_classes()]


def write_legacy_files(data_dir, files):
    """
    Escribe archivos JSON de la V1.

    Args:
        data_dir: Directorio destino (ej: tmp_path)
        files: dict nombre_archivo → contenido (se serializa a JSON;
               si es str se escribe tal cual, útil para JSON corrupto)
    """
    for filename, content in files.items():
        path = os.path.join(str(data_dir), filename)
        with open(path, "w", encoding="utf-8") as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(content, f)
    return data_dir


def make_activity(n):
    return [
        {"id": f"a{i}", "type": "task_moved", "description": f"evento {i}",
         "timestamp": "2025-06-01T10:00:00Z"}
        for i in range(n)
    ]


class InMemoryDestination(Destination):
    """
    Destino falso: una dict por tabla indexada por conflict key.

    Args:
        tables: Tablas existentes (default: config.VERIFY_TABLES)
        fail_tables: Tablas cuyo upsert siempre falla
        fail_calls: Números (1-based) de llamadas a upsert que fallan
        unreachable: Si True, ping() falla
    """

    name = "memoria"

    def __init__(self, tables=None, fail_tables=(), fail_calls=(), unreachable=False):
        existing = config.VERIFY_TABLES if tables is None else tables
        self.tables = {table: {} for table in existing}
        self.fail_tables = set(fail_tables)
        self.fail_calls = set(fail_calls)
        self.unreachable = unreachable
        self.calls = []  # (tabla, cantidad de registros) por cada upsert
        self.reads = []
        self.closed = False

    def upsert(self, table, records, conflict_key="id"):
        self.calls.append((table, len(records)))
        if table in self.fail_tables or len(self.calls) in self.fail_calls:
            raise DestinationError(f"payload rechazado por {table}")
        if table not in self.tables:
            raise DestinationError(f'relation "{table}" does not exist')
        for record in records:
            self.tables[table][record[conflict_key]] = copy.deepcopy(record)

    def count(self, table):
        if table not in self.tables:
            raise DestinationError(f'relation "{table}" does not exist')
        return len(self.tables[table])

    def read_one(self, table):
        self.reads.append(table)
        if table not in self.tables:
            raise DestinationError(f'relation "{table}" does not exist')
        return list(self.tables[table].values())[:1]

    def ping(self):
        if self.unreachable:
            raise DestinationError("connection refused")

    def close(self):
        self.closed = True

    def rows(self, table):
        return self.tables[table]
