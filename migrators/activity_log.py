"""
Migrador para activity.json → tabla activity_log.

Es la única colección que puede crecer sin límite, por eso se escribe en
lotes de config.ACTIVITY_CHUNK_SIZE (ver chunk_size en config.ENTITIES).
"""

from .base import BaseMigrator, Field
from .records import ActivityLogRecord

ACTIVITY_FIELDS = (
    Field("id", "id"),
    Field("type", "type"),
    Field("description", "description"),
    Field("metadata", "metadata", {}),
    Field("timestamp", "timestamp"),
)


class ActivityLogMigrator(BaseMigrator):
    entity = "activity_log"
    FIELDS = ACTIVITY_FIELDS

    def extract_data(self, doc):
        return {"main": self._extract_main_record(doc), "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}

    def _extract_main_record(self, doc) -> ActivityLogRecord:
        return self.map_fields(doc)
