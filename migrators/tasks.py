"""
Migrador para tasks.json.

Las referencias a cliente, proyecto y evento de calendario son opcionales
(null si faltan). subtasks y time_sessions se guardan como JSON.
"""

import config

from .base import NOW, BaseMigrator, Field
from .records import TaskRecord

TASK_FIELDS = (
    Field("id", "id"),
    Field("title", "title"),
    Field("description", "description", ""),
    Field("priority", "priority", "medium"),
    Field("status", "status", "todo"),
    Field("assignee", "assignee", config.DEFAULT_ASSIGNEE),
    Field("estimated_minutes", "estimatedMinutes"),
    Field("deadline", "deadline"),
    Field("subtasks", "subtasks", []),
    Field("tags", "tags", ""),
    Field("client_id", "clientId"),
    Field("project_id", "projectId"),
    Field("calendar_event_id", "calendarEventId"),
    Field("scheduled_start", "scheduledStart"),
    Field("scheduled_end", "scheduledEnd"),
    # La V1 ya guardaba estos dos en snake_case
    Field("time_tracked", "time_tracked", 0),
    Field("time_sessions", "time_sessions", []),
    Field("created_at", "createdAt", NOW),
    Field("updated_at", "updatedAt", NOW),
    Field("completed_at", "completedAt"),
)


class TasksMigrator(BaseMigrator):
    """Migrador específico para tasks.json."""

    entity = "tasks"
    FIELDS = TASK_FIELDS

    def extract_data(self, doc):
        return {"main": self._extract_main_record(doc), "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}

    def _extract_main_record(self, doc) -> TaskRecord:
        return self.map_fields(doc)
