"""
Migrador para revenue.json.

A diferencia del resto, el archivo es un objeto: las entradas están en
revenue.json → entries. Las demás claves (totales precalculados por la V1)
no se migran.
"""

from .base import BaseMigrator, Field
from .records import RevenueRecord

REVENUE_FIELDS = (
    Field("id", "id"),
    Field("client_id", "clientId"),
    Field("client_name", "clientName"),
    Field("project_id", "projectId"),
    Field("project_name", "projectName"),
    Field("amount", "amount"),
    Field("month", "month"),
    Field("year", "year"),
    Field("date", "date"),
    Field("notes", "notes", ""),
    Field("type", "type", "project"),
)


class RevenueMigrator(BaseMigrator):
    entity = "revenue"
    FIELDS = REVENUE_FIELDS

    def extract_documents(self, raw):
        if raw is None:
            return []
        if not isinstance(raw, dict):
            raise ValueError(
                f"{self.source_file}: se esperaba un objeto con 'entries', "
                f"llegó {type(raw).__name__}"
            )
        entries = raw.get("entries") or []
        if not isinstance(entries, list):
            raise ValueError(f"{self.source_file}: 'entries' no es una lista")
        return entries

    def extract_data(self, doc):
        return {"main": self._extract_main_record(doc), "related": {}}

    def initialize_batches(self):
        return {"main": [], "related": {}}

    def _extract_main_record(self, doc) -> RevenueRecord:
        return self.map_fields(doc)
