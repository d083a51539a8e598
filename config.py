"""
Configuración centralizada para la migración Kanban V1 (JSON) → Kanban V2.

ARQUITECTURA:
Una entidad por archivo JSON de la app legacy, cada una con su tabla destino:
- clients: Fuente de clientes y, embebidos, de sus proyectos
- projects: Entidad derivada (no tiene archivo propio, sale de clients)
- tasks, activity_log, progress_logs, schedule, revenue: Colecciones simples
- analytics, achievements: Singletons (un solo registro con id fijo)

FLUJO DE MIGRACIÓN:
1. Ejecutar migradores en orden de MIGRATION_ORDER
2. Cada migrador: cargar JSON → transformar → upsert por 'id'
3. Verificar conteos de VERIFY_TABLES al final

USO DE LAS FUNCIONES HELPER:
    # Obtener configuración de una entidad
    cfg = get_entity_config('activity_log')
    table = cfg['table']            # 'activity_log'
    chunk_size = cfg['chunk_size']  # 1000

    # Verificar credenciales antes de conectar
    missing = get_missing_credentials()
    if missing:
        print(f"Faltan variables: {missing}")
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Carga las variables del archivo .env en las variables de entorno del sistema
load_dotenv(override=True)

PROJECT_ROOT = Path(__file__).resolve().parent

# --- Origen: archivos JSON de la app V1 ---
LEGACY_DATA_DIR = Path(
    os.getenv("LEGACY_DATA_DIR") or PROJECT_ROOT.parent / "kanban" / "data"
)

# --- Destino: Supabase (REST) ---
SUPABASE_URL = os.getenv("SUPABASE_URL") or ""
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY") or ""

# --- Destino: PostgreSQL directo (alternativa a Supabase) ---
POSTGRES_CONFIG = {
    "dbname": os.getenv("POSTGRES_DB") or "",
    "user": os.getenv("POSTGRES_USER") or "",
    "password": os.getenv("POSTGRES_PASSWORD") or "",
    "host": os.getenv("POSTGRES_HOST") or "localhost",
    "port": os.getenv("POSTGRES_PORT") or "5432",
}

# 'supabase' o 'postgres'. Si no se indica, se usa Supabase cuando hay URL.
DESTINATION_BACKEND = (
    os.getenv("MIGRATION_DESTINATION") or ("supabase" if SUPABASE_URL else "postgres")
).lower()

# --- Configuración de Migración ---
ACTIVITY_CHUNK_SIZE = 1000  # Registros por upsert en activity_log
SINGLETON_ID = "singleton"  # id fijo de analytics y achievements
DEFAULT_ASSIGNEE = "Brandon"  # Responsable por defecto de tareas sin asignar

# --- Registro de Entidades ---
# Cada entidad define:
# - source_file: Archivo JSON en LEGACY_DATA_DIR (None si es derivada)
# - table: Tabla destino
# - conflict_key: Columna usada para el upsert (insert-or-replace)
# - chunk_size: Tamaño de lote (None = un solo upsert)
# - singleton: True si la entidad es un único registro con id fijo
# - derived_from: Entidad de la que se extraen los registros (o None)
# - description: Descripción de negocio

ENTITIES = {
    "clients": {
        "source_file": "clients.json",
        "table": "clients",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": None,
        "description": "Clientes con contactos, ubicaciones y proyectos embebidos",
    },
    "projects": {
        "source_file": None,
        "table": "projects",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": "clients",
        "description": "Proyectos extraídos de clients[*].projects",
    },
    "tasks": {
        "source_file": "tasks.json",
        "table": "tasks",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": None,
        "description": "Tareas del tablero con subtareas y sesiones de tiempo",
    },
    "activity_log": {
        "source_file": "activity.json",
        "table": "activity_log",
        "conflict_key": "id",
        "chunk_size": ACTIVITY_CHUNK_SIZE,
        "singleton": False,
        "derived_from": None,
        "description": "Historial de actividad (puede ser muy grande)",
    },
    "progress_logs": {
        "source_file": "progress-logs.json",
        "table": "progress_logs",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": None,
        "description": "Registros de avance por tarea",
    },
    "schedule": {
        "source_file": "schedule.json",
        "table": "schedule",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": None,
        "description": "Bloques de agenda asociados a tareas",
    },
    "revenue": {
        "source_file": "revenue.json",
        "table": "revenue",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": False,
        "derived_from": None,
        "description": "Ingresos por cliente/proyecto (revenue.json → entries)",
    },
    "analytics": {
        "source_file": "analytics.json",
        "table": "analytics",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": True,
        "derived_from": None,
        "description": "Métricas agregadas de productividad",
    },
    "achievements": {
        "source_file": "achievements.json",
        "table": "achievements",
        "conflict_key": "id",
        "chunk_size": None,
        "singleton": True,
        "derived_from": None,
        "description": "Puntos, nivel y logros desbloqueados",
    },
}

# --- Orden de Migración ---
# Solo entidades con archivo propio; projects se escribe junto con clients.
MIGRATION_ORDER = [
    "clients",  # También escribe projects
    "tasks",
    "activity_log",
    "progress_logs",
    "schedule",
    "revenue",
    "analytics",
    "achievements",
]

# --- Tablas a verificar al final ---
VERIFY_TABLES = [cfg["table"] for cfg in ENTITIES.values()]


class ConfigError(Exception):
    """Configuración incompleta o inválida para conectar al destino."""


# --- Funciones Helper ---


def get_entity_config(entity_name: str) -> dict:
    """
    Obtiene la configuración de una entidad por nombre.

    Args:
        entity_name: Nombre de la entidad (ej: 'clients')

    Returns:
        dict: Configuración con keys source_file, table, conflict_key,
              chunk_size, singleton, derived_from, description

    Raises:
        KeyError: Si la entidad no está configurada

    Ejemplo:
        >>> get_entity_config('activity_log')['chunk_size']
        1000
    """
    if entity_name not in ENTITIES:
        available = ", ".join(ENTITIES.keys())
        raise KeyError(
            f"Entidad '{entity_name}' no está configurada.\n"
            f"Entidades disponibles: {available}"
        )
    return ENTITIES[entity_name]


def get_table_for_entity(entity_name: str) -> str:
    """Atajo para obtener la tabla destino de una entidad."""
    return get_entity_config(entity_name)["table"]


def is_singleton(entity_name: str) -> bool:
    """
    Verifica si una entidad es singleton.

    Los singletons se escriben siempre con id = SINGLETON_ID, por lo que
    ejecutar la migración N veces sobrescribe el mismo registro.
    """
    return get_entity_config(entity_name).get("singleton", False)


def get_derived_entities(entity_name: str) -> list:
    """Retorna las entidades que se extraen de los registros de otra."""
    return [
        name
        for name, cfg in ENTITIES.items()
        if cfg.get("derived_from") == entity_name
    ]


def get_missing_credentials(backend: str = None) -> list:
    """
    Lista las variables de entorno obligatorias que faltan para un backend.

    Args:
        backend: 'supabase' o 'postgres' (por defecto DESTINATION_BACKEND)

    Returns:
        list: Nombres de variables faltantes. Vacía si está todo configurado.

    Raises:
        ConfigError: Si el backend no es conocido
    """
    backend = (backend or DESTINATION_BACKEND).lower()

    if backend == "supabase":
        required = {
            "SUPABASE_URL": SUPABASE_URL,
            "SUPABASE_SERVICE_KEY": SUPABASE_SERVICE_KEY,
        }
    elif backend == "postgres":
        required = {
            "POSTGRES_DB": POSTGRES_CONFIG["dbname"],
            "POSTGRES_USER": POSTGRES_CONFIG["user"],
        }
    else:
        raise ConfigError(
            f"Destino '{backend}' no soportado (usar 'supabase' o 'postgres')"
        )

    return [name for name, value in required.items() if not value]
