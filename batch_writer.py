"""
Escritura idempotente por lotes.

Cada llamada a write() hace upsert (insert-or-replace por conflict_key) de
una secuencia de registros ya transformados:
- Sin chunk_size: un único upsert con toda la colección.
- Con chunk_size: lotes secuenciales de ese tamaño. El lote n+1 no empieza
  hasta que el lote n terminó, y un lote fallido NO impide intentar los
  siguientes.

Los errores no se reintentan ni se propagan: quedan en el TableResult.
"""

from destinations import DestinationError
from results import FAILED, MIGRATED, PARTIAL, SKIPPED, ChunkResult, TableResult


def chunked(records, size):
    """Divide una lista en sublistas de `size` elementos (la última puede ser menor)."""
    for start in range(0, len(records), size):
        yield records[start : start + size]


class BatchWriter:
    """
    Escritor de lotes sobre un Destination.

    Attributes:
        destination: Implementación de destinations.Destination
    """

    def __init__(self, destination):
        self.destination = destination

    def write(
        self,
        table,
        records,
        chunk_size=None,
        conflict_key="id",
        entity=None,
        result=None,
    ) -> TableResult:
        """
        Hace upsert de `records` en `table`.

        Args:
            table: Tabla destino
            records: Lista de dicts con la forma canónica de la tabla
            chunk_size: Tamaño de lote; None para un solo upsert
            conflict_key: Columna de conflicto del upsert
            entity: Nombre de entidad para el resultado (default: table)
            result: TableResult a completar (permite conservar found/rejected)

        Returns:
            TableResult: Estado de la tabla con un ChunkResult por upsert
        """
        result = result or TableResult(entity=entity or table, table=table)

        if not records:
            result.status = SKIPPED
            return result

        batches = chunked(records, chunk_size) if chunk_size else [records]

        for index, batch in enumerate(batches, 1):
            try:
                self.destination.upsert(table, batch, conflict_key=conflict_key)
                result.chunks.append(ChunkResult(index=index, size=len(batch)))
            except DestinationError as e:
                result.chunks.append(
                    ChunkResult(index=index, size=len(batch), error=str(e))
                )

        failed = [c for c in result.chunks if not c.ok]
        if not failed:
            result.status = MIGRATED
        elif len(failed) == len(result.chunks):
            result.status = FAILED
            result.error = failed[0].error
        else:
            result.status = PARTIAL
            result.error = failed[0].error

        return result
