"""
Migrador para schedule.json.

Algunas entradas de agenda de la V1 no tienen id. Para esas se genera uno
con el formato schedule-<epoch ms>-<9 caracteres base36 aleatorios>.
Alcanza para una migración de una sola vez; no es criptográficamente fuerte.

Nota: como el id generado cambia en cada ejecución, re-ejecutar la migración
duplica las entradas que no tenían id en el origen.
"""

import random
import string
import time

from .base import NOW, BaseMigrator, Field
from .records import ScheduleRecord

SCHEDULE_FIELDS = (
    Field("id", "id"),
    Field("task_id", "taskId"),
    Field("task_title", "taskTitle"),
    Field("start_time", "start"),
    Field("end_time", "end"),
    Field("created_at", "createdAt", NOW),
)

_BASE36 = string.digits + string.ascii_lowercase


def generate_schedule_id() -> str:
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"schedule-{int(time.time() * 1000)}-{suffix}"


class ScheduleMigrator(BaseMigrator):
    """
    Migrador específico para schedule.json.

    Args:
        id_factory: Función sin argumentos que genera ids para entradas sin id
                    (inyectable para tests)
    """

    entity = "schedule"
    FIELDS = SCHEDULE_FIELDS

    def __init__(self, table=None, timestamp=None, id_factory=None):
        super().__init__(table, timestamp)
        self.id_factory = id_factory or generate_schedule_id

    def extract_data(self, doc):
        return {"main": self._extract_main_record(doc), "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}

    def _extract_main_record(self, doc) -> ScheduleRecord:
        record = self.map_fields(doc)
        if record["id"] in (None, ""):
            record["id"] = self.id_factory()
        return record
