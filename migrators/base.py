"""
Módulo base para migradores de entidades Kanban V1 (JSON) → V2.

Define la interfaz común (contrato) que todos los migradores específicos
deben implementar. Esto permite que kanbanmigra.py funcione con cualquier
migrador sin conocer sus detalles internos.

Patrón de diseño: Strategy Pattern
- kanbanmigra.py = Contexto (orquestador)
- BaseMigrator = Estrategia abstracta
- ClientsMigrator, TasksMigrator, ... = Estrategias concretas

Flujo de uso:
1. kanbanmigra.py carga dinámicamente un migrador
2. migrate() lee el JSON de origen (LegacySource)
3. extract_documents() normaliza la forma del archivo a una lista
4. transform() llama a extract_data() por documento y acumula en batches
5. insert_batches() hace upsert de main y related vía BatchWriter

Las reglas de mapeo viven en una tabla FIELDS por entidad:
    FIELDS = (
        Field('email', 'email', ''),         # columna, clave legacy, default
        Field('rate_type', 'rateType', 'project'),
        Field('created_at', 'createdAt', NOW),
    )

Un valor legacy presente y no-null se conserva tal cual; si falta (o es
null) se usa el default. NOW se resuelve al timestamp de la ejecución, que
se captura una sola vez por migrador: transformar dos veces el mismo input
con el mismo migrador da exactamente los mismos registros.
"""

import copy
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, NamedTuple, Optional

import config
from results import SKIPPED, TableResult


class _Now:
    """Marcador de default: timestamp de la ejecución."""

    def __repr__(self):
        return "NOW"


NOW = _Now()


class Field(NamedTuple):
    column: str  # Columna destino
    source: Optional[str]  # Clave en el JSON legacy (None = siempre default)
    default: Any = None


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseMigrator(ABC):
    """
    Clase abstracta que define la interfaz para migradores de entidades.

    Cada archivo de la V1 (clients.json, tasks.json, etc.) tiene un migrador
    que hereda de esta clase. Las subclases declaran `entity` y `FIELDS`.

    Attributes:
        entity (str): Nombre de la entidad en config.ENTITIES
        table (str): Tabla destino
        timestamp (str): Timestamp ISO usado para los defaults NOW
    """

    entity = None
    FIELDS = ()

    def __init__(self, table: str = None, timestamp: str = None):
        """
        Args:
            table: Tabla destino (por defecto la de config.ENTITIES)
            timestamp: Timestamp fijo para los defaults NOW (por defecto, ahora)
        """
        entity_config = config.get_entity_config(self.entity)
        self.table = table or entity_config["table"]
        self.source_file = entity_config["source_file"]
        self.conflict_key = entity_config["conflict_key"]
        self.chunk_size = entity_config["chunk_size"]
        self.timestamp = timestamp or utc_now_iso()

    # =========================================================================
    # INTERFAZ
    # =========================================================================

    @abstractmethod
    def extract_data(self, doc: dict) -> dict:
        """
        Convierte un documento legacy en registros destino.

        Returns:
            dict: Estructura con dos niveles:
                {
                    'main': dict con la forma canónica de self.table,
                    'related': {
                        'tabla1': [dict, dict, ...],
                        ...
                    }
                }

        Ejemplo para clients:
            {
                'main': {'id': 'c1', 'name': 'Acme', ...},
                'related': {'projects': [{'id': 'p1', 'client_id': 'c1', ...}]}
            }
        """

    @abstractmethod
    def initialize_batches(self) -> dict:
        """
        Retorna estructura vacía para acumular batches.

        Debe tener la misma forma que extract_data():
            {'main': [], 'related': {'tabla1': [], ...}}
        """

    def get_primary_key_from_doc(self, doc: dict):
        """Valor del identificador del documento legacy (None si falta)."""
        value = doc.get("id")
        return None if value in (None, "") else value

    def extract_documents(self, raw) -> list:
        """
        Normaliza el contenido del archivo a una lista de documentos.

        Por defecto el archivo es un array JSON. Las subclases con otra forma
        (revenue.json, singletons) sobrescriben este método.

        Raises:
            ValueError: Si el archivo tiene una forma inesperada
        """
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ValueError(
                f"{self.source_file}: se esperaba una lista, llegó {type(raw).__name__}"
            )
        return raw

    # =========================================================================
    # TRANSFORMACIÓN
    # =========================================================================

    def map_fields(self, doc: dict, fields=None) -> dict:
        """Aplica una tabla de Field a un documento legacy."""
        record = {}
        for field in fields or self.FIELDS:
            value = doc.get(field.source) if field.source else None
            record[field.column] = (
                value if value is not None else self._default_for(field.default)
            )
        return record

    def transform(self, docs: list) -> dict:
        """
        Transforma todos los documentos y los acumula en batches.

        Función pura: no toca el destino ni modifica `docs`. Los elementos que
        no son objetos JSON se ignoran (se cuentan como rechazados en migrate()).

        Si extract_data() devuelve 'rejected' (tabla → cantidad de elementos
        embebidos descartados), se acumula en batches['rejected'].
        """
        batches = self.initialize_batches()
        batches.setdefault("rejected", {})

        for doc in docs:
            if not isinstance(doc, dict):
                continue
            data = self.extract_data(doc)
            batches["main"].append(data["main"])
            for table_name, records in data["related"].items():
                batches["related"][table_name].extend(records)
            for table_name, count in data.get("rejected", {}).items():
                batches["rejected"][table_name] = (
                    batches["rejected"].get(table_name, 0) + count
                )

        return batches

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    def insert_batches(self, batches: dict, writer, result: TableResult = None) -> list:
        """
        Hace upsert de main y de cada tabla relacionada.

        Los registros sin conflict_key no se envían: se suman a `rejected`,
        igual que los elementos embebidos descartados en transform().
        Las tablas related usan su propia configuración de config.ENTITIES.

        Returns:
            list[TableResult]: Uno para main y uno por tabla relacionada
        """
        result = result or TableResult(entity=self.entity, table=self.table)
        results = [
            self._write_records(
                writer, self.entity, self.table, batches["main"], self.chunk_size,
                self.conflict_key, result,
            )
        ]

        discarded = batches.get("rejected", {})
        for table_name, records in batches["related"].items():
            entity_config = config.get_entity_config(table_name)
            embedded_rejected = discarded.get(table_name, 0)
            related = TableResult(
                entity=table_name,
                table=entity_config["table"],
                found=len(records) + embedded_rejected,
                rejected=embedded_rejected,
            )
            results.append(
                self._write_records(
                    writer, table_name, entity_config["table"], records,
                    entity_config["chunk_size"], entity_config["conflict_key"], related,
                )
            )

        return results

    def migrate(self, source, writer) -> list:
        """
        Ejecuta carga → transformación → escritura para esta entidad.

        Un archivo faltante, corrupto o vacío es un skip (no un error fatal):
        no se invoca ni la transformación ni el escritor.

        Args:
            source: legacy_source.LegacySource
            writer: batch_writer.BatchWriter

        Returns:
            list[TableResult]: main + tablas relacionadas
        """
        result = TableResult(entity=self.entity, table=self.table)
        skipped = [result] + [
            TableResult(entity=name, table=config.get_table_for_entity(name))
            for name in self.initialize_batches()["related"]
        ]

        load = source.load(self.source_file)
        if load.error:
            result.error = load.error
            return skipped

        try:
            docs = self.extract_documents(load.data)
        except ValueError as e:
            result.error = str(e)
            return skipped

        if not docs:
            return skipped

        result.found = len(docs)
        batches = self.transform(docs)
        result.rejected = len(docs) - len(batches["main"])

        return self.insert_batches(batches, writer, result)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _default_for(self, default):
        if default is NOW:
            return self.timestamp
        # Copia para que dos registros nunca compartan la misma lista/dict
        if isinstance(default, (list, dict)):
            return copy.deepcopy(default)
        return default

    def _write_records(
        self, writer, entity, table, records, chunk_size, conflict_key, result
    ):
        valid = [r for r in records if r.get(conflict_key) not in (None, "")]
        result.rejected += len(records) - len(valid)

        if not valid:
            result.status = SKIPPED
            return result

        return writer.write(
            table,
            valid,
            chunk_size=chunk_size,
            conflict_key=conflict_key,
            entity=entity,
            result=result,
        )


class SingletonMigrator(BaseMigrator):
    """
    Base para entidades de un único registro (analytics, achievements).

    El archivo es un objeto JSON (no una lista) y el registro se escribe
    siempre con id = config.SINGLETON_ID: re-ejecutar sobrescribe, no acumula.
    Un objeto vacío `{}` se migra igual, con todos los defaults.
    """

    def extract_documents(self, raw):
        if raw is None:
            return []
        if not isinstance(raw, dict):
            raise ValueError(
                f"{self.source_file}: se esperaba un objeto, llegó {type(raw).__name__}"
            )
        return [raw]

    def get_primary_key_from_doc(self, doc):
        return config.SINGLETON_ID

    def extract_data(self, doc):
        record = self.map_fields(doc)
        record["id"] = self.get_primary_key_from_doc(doc)
        return {"main": record, "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}
