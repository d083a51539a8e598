"""Migrador para progress-logs.json (avance por tarea, título desnormalizado)."""

from .base import BaseMigrator, Field
from .records import ProgressLogRecord

PROGRESS_LOG_FIELDS = (
    Field("id", "id"),
    Field("task_id", "taskId"),
    Field("task_title", "taskTitle"),
    Field("status", "status"),
    Field("comment", "comment", ""),
    Field("actual_minutes", "actualMinutes"),
    Field("timestamp", "timestamp"),
)


class ProgressLogsMigrator(BaseMigrator):
    entity = "progress_logs"
    FIELDS = PROGRESS_LOG_FIELDS

    def extract_data(self, doc):
        return {"main": self._extract_main_record(doc), "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}

    def _extract_main_record(self, doc) -> ProgressLogRecord:
        return self.map_fields(doc)
