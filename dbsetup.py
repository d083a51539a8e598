# dbsetup.py
"""
Script de configuración de las tablas destino de Kanban V2.

Crea las 9 tablas que la migración necesita. Sirve para los dos destinos:
- PostgreSQL directo: `python dbsetup.py` las crea vía psycopg2
- Supabase: `python dbsetup.py --print-sql` imprime el script para pegarlo
  en el SQL Editor del dashboard (la API REST no puede ejecutar DDL)

CONVENCIÓN DE NAMING:
Archivo V1                 Tabla V2
--------------------       -------------------
clients.json           →   clients (+ projects)
activity.json          →   activity_log
progress-logs.json     →   progress_logs
*.json                 →   mismo nombre

DECISIONES DE DISEÑO:
- Todos los id son TEXT: la V1 generaba ids string ('c1', 'task-169...')
- Listas y objetos embebidos (tags, contacts, subtasks, metadata) → JSONB
- tasks.tags es TEXT: en la V1 es un string separado por comas
- projects.client_id con FK a clients (se migran en el mismo paso)
"""

import sys

import config
from destinations import PostgresDestination, DestinationError

# Tabla → [(columna, definición)]. El orden respeta las FKs.
SCHEMA = {
    "clients": [
        ("id", "TEXT PRIMARY KEY"),
        ("name", "TEXT"),
        ("email", "TEXT DEFAULT ''"),
        ("phone", "TEXT DEFAULT ''"),
        ("company", "TEXT DEFAULT ''"),
        ("rate", "NUMERIC DEFAULT 0"),
        ("rate_type", "TEXT DEFAULT 'project'"),
        ("status", "TEXT DEFAULT 'active'"),
        ("notes", "TEXT DEFAULT ''"),
        ("tags", "JSONB DEFAULT '[]'::jsonb"),
        ("contacts", "JSONB DEFAULT '[]'::jsonb"),
        ("locations", "JSONB DEFAULT '[]'::jsonb"),
        ("total_revenue", "NUMERIC DEFAULT 0"),
        ("created_at", "TIMESTAMPTZ DEFAULT NOW()"),
        ("updated_at", "TIMESTAMPTZ DEFAULT NOW()"),
    ],
    "projects": [
        ("id", "TEXT PRIMARY KEY"),
        ("client_id", "TEXT REFERENCES clients(id) ON DELETE CASCADE"),
        ("name", "TEXT"),
        ("description", "TEXT DEFAULT ''"),
        ("status", "TEXT DEFAULT 'active'"),
        ("value", "NUMERIC DEFAULT 0"),
        ("currency", "TEXT DEFAULT 'AUD'"),
        ("deadline", "TEXT"),
        ("location_id", "TEXT"),
        ("created_at", "TIMESTAMPTZ DEFAULT NOW()"),
        ("updated_at", "TIMESTAMPTZ DEFAULT NOW()"),
    ],
    "tasks": [
        ("id", "TEXT PRIMARY KEY"),
        ("title", "TEXT"),
        ("description", "TEXT DEFAULT ''"),
        ("priority", "TEXT DEFAULT 'medium'"),
        ("status", "TEXT DEFAULT 'todo'"),
        ("assignee", "TEXT"),
        ("estimated_minutes", "INTEGER"),
        ("deadline", "TEXT"),
        ("subtasks", "JSONB DEFAULT '[]'::jsonb"),
        ("tags", "TEXT DEFAULT ''"),
        ("client_id", "TEXT"),
        ("project_id", "TEXT"),
        ("calendar_event_id", "TEXT"),
        ("scheduled_start", "TIMESTAMPTZ"),
        ("scheduled_end", "TIMESTAMPTZ"),
        ("time_tracked", "INTEGER DEFAULT 0"),
        ("time_sessions", "JSONB DEFAULT '[]'::jsonb"),
        ("created_at", "TIMESTAMPTZ DEFAULT NOW()"),
        ("updated_at", "TIMESTAMPTZ DEFAULT NOW()"),
        ("completed_at", "TIMESTAMPTZ"),
    ],
    "activity_log": [
        ("id", "TEXT PRIMARY KEY"),
        ("type", "TEXT"),
        ("description", "TEXT"),
        ("metadata", "JSONB DEFAULT '{}'::jsonb"),
        ("timestamp", "TIMESTAMPTZ"),
    ],
    "progress_logs": [
        ("id", "TEXT PRIMARY KEY"),
        ("task_id", "TEXT"),
        ("task_title", "TEXT"),
        ("status", "TEXT"),
        ("comment", "TEXT DEFAULT ''"),
        ("actual_minutes", "INTEGER"),
        ("timestamp", "TIMESTAMPTZ"),
    ],
    "schedule": [
        ("id", "TEXT PRIMARY KEY"),
        ("task_id", "TEXT"),
        ("task_title", "TEXT"),
        ("start_time", "TIMESTAMPTZ"),
        ("end_time", "TIMESTAMPTZ"),
        ("created_at", "TIMESTAMPTZ DEFAULT NOW()"),
    ],
    "revenue": [
        ("id", "TEXT PRIMARY KEY"),
        ("client_id", "TEXT"),
        ("client_name", "TEXT"),
        ("project_id", "TEXT"),
        ("project_name", "TEXT"),
        ("amount", "NUMERIC"),
        ("month", "TEXT"),
        ("year", "INTEGER"),
        ("date", "TEXT"),
        ("notes", "TEXT DEFAULT ''"),
        ("type", "TEXT DEFAULT 'project'"),
    ],
    "analytics": [
        ("id", "TEXT PRIMARY KEY"),
        ("total_tasks_completed", "INTEGER DEFAULT 0"),
        ("average_completion_time", "NUMERIC DEFAULT 0"),
        ("on_time_completion_rate", "NUMERIC DEFAULT 0"),
        ("productivity_by_hour", "JSONB DEFAULT '{}'::jsonb"),
        ("priority_distribution", "JSONB DEFAULT '{}'::jsonb"),
        ("last_updated", "TIMESTAMPTZ DEFAULT NOW()"),
    ],
    "achievements": [
        ("id", "TEXT PRIMARY KEY"),
        ("total_points", "INTEGER DEFAULT 0"),
        ("level", "INTEGER DEFAULT 1"),
        ("unlocked", "JSONB DEFAULT '[]'::jsonb"),
        ("last_updated", "TIMESTAMPTZ DEFAULT NOW()"),
    ],
}

# Índices para los joins más usados por la V2
INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_client ON projects(client_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_client ON tasks(client_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_progress_logs_task ON progress_logs(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_schedule_task ON schedule(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_activity_log_timestamp ON activity_log(timestamp)",
]


def get_table_columns(table: str) -> list:
    """Nombres de columnas de una tabla de SCHEMA."""
    return [column for column, _ in SCHEMA[table]]


def build_create_table_sql(table: str) -> str:
    columns = ",\n".join(f"    {column} {definition}" for column, definition in SCHEMA[table])
    return f"CREATE TABLE IF NOT EXISTS {table} (\n{columns}\n);"


def build_schema_sql() -> str:
    """Script completo (tablas + índices) listo para el SQL Editor."""
    statements = [build_create_table_sql(table) for table in SCHEMA]
    statements += [f"{index};" for index in INDEXES]
    return "\n\n".join(statements) + "\n"


def setup_tables(cursor):
    """Crea todas las tablas e índices (idempotente: IF NOT EXISTS)."""
    for table in SCHEMA:
        print(f"\n   🔧 Creando tabla '{table}'...")
        cursor.execute(build_create_table_sql(table))

    for index in INDEXES:
        cursor.execute(index)

    print(f"\n   ✅ {len(SCHEMA)} tablas y {len(INDEXES)} índices creados")


def main(argv=None):
    """
    Punto de entrada principal.

    Uso:
        python dbsetup.py              # crear tablas vía psycopg2
        python dbsetup.py --print-sql  # solo imprimir el SQL
    """
    argv = sys.argv[1:] if argv is None else argv

    if "--print-sql" in argv:
        print(build_schema_sql())
        return 0

    print("=" * 70)
    print("🚀 CONFIGURACIÓN DE TABLAS KANBAN V2 (PostgreSQL)")
    print("=" * 70)

    missing = config.get_missing_credentials("postgres")
    if missing:
        print(f"❌ Faltan variables de entorno: {', '.join(missing)}", file=sys.stderr)
        print("   Para Supabase usar: python dbsetup.py --print-sql", file=sys.stderr)
        return 1

    try:
        destination = PostgresDestination.connect()
    except DestinationError as e:
        print(f"❌ Error conectando a PostgreSQL: {e}", file=sys.stderr)
        return 1

    conn = destination.conn
    cursor = conn.cursor()

    try:
        print("\n🔨 Creando estructura de base de datos...")
        setup_tables(cursor)
        conn.commit()

        print("\n" + "=" * 70)
        print("✅ Base de datos configurada correctamente")
        print("=" * 70)
        return 0

    except Exception as e:
        conn.rollback()
        print(f"\n❌ Error durante la configuración: {e}", file=sys.stderr)
        return 1
    finally:
        cursor.close()
        destination.close()


if __name__ == "__main__":
    sys.exit(main())
