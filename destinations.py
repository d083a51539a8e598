"""
Acceso al destino de la migración.

Toda la migración necesita solo tres operaciones sobre el destino:
- upsert: insertar o reemplazar registros usando una columna como conflict key
- count: contar filas de una tabla
- read_one: leer una fila (usado por check_schema.py)

Más ping() para probar conectividad antes de empezar.

Implementaciones:
    SupabaseDestination: API REST de Supabase (cliente oficial 'supabase')
    PostgresDestination: Conexión directa con psycopg2

Ambas levantan DestinationError con el mensaje original ante cualquier fallo,
así el orquestador puede registrar el error y seguir con la próxima tabla.

Uso:
    destination = connect_destination()
    destination.upsert('clients', records, conflict_key='id')
    print(destination.count('clients'))
    destination.close()
"""

from abc import ABC, abstractmethod

import psycopg2
from psycopg2 import sql
from psycopg2.extras import Json, RealDictCursor, execute_values
from supabase import create_client

import config

# Códigos de PostgREST / PostgreSQL que indican "conecta, pero la tabla no existe"
MISSING_TABLE_CODES = {"42P01", "PGRST205"}


class DestinationError(Exception):
    """Fallo de una operación contra el destino (mensaje original incluido)."""


class Destination(ABC):
    """Interfaz mínima que la migración requiere del destino."""

    name = "destino"

    @abstractmethod
    def upsert(self, table: str, records: list, conflict_key: str = "id"):
        """Inserta o reemplaza `records` en `table` según `conflict_key`."""

    @abstractmethod
    def count(self, table: str) -> int:
        """Retorna la cantidad de filas de `table`."""

    @abstractmethod
    def read_one(self, table: str) -> list:
        """Lee como máximo una fila de `table` (lista de dicts)."""

    @abstractmethod
    def ping(self):
        """Prueba trivial de conectividad. Levanta DestinationError si falla."""

    def close(self):
        pass


# =============================================================================
# SUPABASE
# =============================================================================


class SupabaseDestination(Destination):
    """
    Destino Supabase usando el cliente oficial.

    Requiere la service key (no la anon key) para saltear RLS durante la carga.
    """

    name = "supabase"

    def __init__(self, url: str, key: str, client=None):
        self.url = url
        self.client = client or create_client(url, key)

    def upsert(self, table, records, conflict_key="id"):
        try:
            self.client.table(table).upsert(records, on_conflict=conflict_key).execute()
        except Exception as e:
            raise DestinationError(_error_message(e)) from e

    def count(self, table):
        try:
            response = (
                self.client.table(table)
                .select("*", count="exact", head=True)
                .execute()
            )
        except Exception as e:
            raise DestinationError(_error_message(e)) from e
        return response.count or 0

    def read_one(self, table):
        try:
            response = self.client.table(table).select("*").limit(1).execute()
        except Exception as e:
            raise DestinationError(_error_message(e)) from e
        return response.data or []

    def ping(self):
        """
        Consulta la primera tabla esperada.

        Si la API responde "tabla inexistente" la conexión y la key son
        válidas (solo falta crear el schema), así que no es un fallo de ping.
        """
        first_table = config.VERIFY_TABLES[0]
        try:
            self.client.table(first_table).select("id").limit(1).execute()
        except Exception as e:
            if getattr(e, "code", None) in MISSING_TABLE_CODES:
                return
            raise DestinationError(_error_message(e)) from e


# =============================================================================
# POSTGRESQL DIRECTO
# =============================================================================


class PostgresDestination(Destination):
    """
    Destino PostgreSQL con psycopg2.

    Cada operación hace commit propio; ante error se hace rollback para que
    la conexión quede usable para la siguiente tabla.
    """

    name = "postgres"

    def __init__(self, conn):
        self.conn = conn

    @classmethod
    def connect(cls, params: dict = None):
        try:
            return cls(psycopg2.connect(**(params or config.POSTGRES_CONFIG)))
        except psycopg2.OperationalError as e:
            raise DestinationError(str(e).strip()) from e

    def upsert(self, table, records, conflict_key="id"):
        if not records:
            return

        columns = list(records[0].keys())
        updates = [c for c in columns if c != conflict_key]
        query = sql.SQL(
            "INSERT INTO {table} ({columns}) VALUES %s "
            "ON CONFLICT ({key}) DO UPDATE SET {updates}"
        ).format(
            table=sql.Identifier(table),
            columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
            key=sql.Identifier(conflict_key),
            updates=sql.SQL(", ").join(
                sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c))
                for c in updates
            ),
        )
        rows = [tuple(_adapt(record.get(c)) for c in columns) for record in records]

        try:
            with self.conn.cursor() as cursor:
                execute_values(cursor, query.as_string(self.conn), rows, page_size=1000)
            self.conn.commit()
        except psycopg2.Error as e:
            self.conn.rollback()
            raise DestinationError(str(e).strip()) from e

    def count(self, table):
        query = sql.SQL("SELECT COUNT(*) FROM {}").format(sql.Identifier(table))
        try:
            with self.conn.cursor() as cursor:
                cursor.execute(query)
                total = cursor.fetchone()[0]
            self.conn.commit()
        except psycopg2.Error as e:
            self.conn.rollback()
            raise DestinationError(str(e).strip()) from e
        return total

    def read_one(self, table):
        query = sql.SQL("SELECT * FROM {} LIMIT 1").format(sql.Identifier(table))
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query)
                rows = [dict(row) for row in cursor.fetchall()]
            self.conn.commit()
        except psycopg2.Error as e:
            self.conn.rollback()
            raise DestinationError(str(e).strip()) from e
        return rows

    def ping(self):
        try:
            with self.conn.cursor() as cursor:
                cursor.execute("SELECT 1")
            self.conn.commit()
        except psycopg2.Error as e:
            raise DestinationError(str(e).strip()) from e

    def close(self):
        self.conn.close()


# =============================================================================
# HELPERS
# =============================================================================


def connect_destination(backend: str = None) -> Destination:
    """
    Construye el destino configurado en config.DESTINATION_BACKEND.

    Raises:
        config.ConfigError: Si faltan credenciales o el backend no existe
        DestinationError: Si no se puede abrir la conexión
    """
    backend = (backend or config.DESTINATION_BACKEND).lower()
    missing = config.get_missing_credentials(backend)
    if missing:
        raise config.ConfigError(
            f"Faltan credenciales para '{backend}': {', '.join(missing)}"
        )

    if backend == "supabase":
        try:
            return SupabaseDestination(config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY)
        except Exception as e:
            raise DestinationError(_error_message(e)) from e
    return PostgresDestination.connect()


def describe_destination(backend: str = None) -> str:
    """Texto corto del destino para banners (sin credenciales)."""
    backend = (backend or config.DESTINATION_BACKEND).lower()
    if backend == "supabase":
        return config.SUPABASE_URL or "(supabase sin URL)"
    pg = config.POSTGRES_CONFIG
    return f"postgresql://{pg['host']}:{pg['port']}/{pg['dbname']}"


def _adapt(value):
    # Listas y dicts van a columnas JSONB
    if isinstance(value, (dict, list)):
        return Json(value)
    return value


def _error_message(error) -> str:
    message = getattr(error, "message", None)
    return str(message or error).strip()
