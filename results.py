"""
Resultados estructurados de cada etapa de la migración.

Las etapas (carga, transformación, escritura, verificación) NO imprimen nada:
devuelven estos objetos y report.py se encarga de mostrarlos en consola.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# Estados posibles de una tabla
MIGRATED = "migrated"  # Todos los lotes escritos
PARTIAL = "partial"  # Algunos lotes fallaron
FAILED = "failed"  # Ningún lote escrito
SKIPPED = "skipped"  # Sin datos de origen (no es un error)


@dataclass
class ChunkResult:
    """Resultado de un upsert individual (un lote)."""

    index: int  # 1-based
    size: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class TableResult:
    """Resultado de migrar una tabla destino."""

    entity: str
    table: str
    status: str = SKIPPED
    found: int = 0  # Registros leídos del origen
    rejected: int = 0  # Descartados antes de escribir (sin id, no-objeto)
    chunks: List[ChunkResult] = field(default_factory=list)
    error: Optional[str] = None  # Error de carga o resumen del fallo de escritura

    @property
    def written(self) -> int:
        return sum(c.size for c in self.chunks if c.ok)

    @property
    def failed(self) -> int:
        return sum(c.size for c in self.chunks if not c.ok)

    @property
    def has_failures(self) -> bool:
        return self.status in (FAILED, PARTIAL)


@dataclass
class VerificationResult:
    """Conteo de filas de una tabla después de migrar."""

    table: str
    count: Optional[int] = None
    error: Optional[str] = None


@dataclass
class MigrationReport:
    """Resumen completo de una ejecución."""

    source: str
    destination: str
    tables: List[TableResult] = field(default_factory=list)
    verification: List[VerificationResult] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return any(t.has_failures for t in self.tables) or any(
            v.error for v in self.verification
        )

    def get_table(self, table: str) -> Optional[TableResult]:
        for result in self.tables:
            if result.table == table:
                return result
        return None
