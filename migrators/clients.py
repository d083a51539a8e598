"""
Migrador para clients.json.

RESPONSABILIDAD:
- Transforma cada cliente a la tabla 'clients'
- Extrae los proyectos embebidos (client.projects) a la tabla 'projects'

DECISIONES DE DISEÑO:
- El registro de 'clients' NUNCA lleva la lista de proyectos
- Cada proyecto extraído se marca con client_id = id del cliente dueño
- contacts, locations y tags se conservan como JSON (no se normalizan)
- Proyectos que no son objetos (o un "projects" que no es lista) se cuentan
  como rechazados en el resultado de projects; el cliente se migra igual

Uso (desde kanbanmigra.py):
    migrator = ClientsMigrator()
    results = migrator.migrate(source, writer)  # [clients, projects]
"""

import config

from .base import NOW, BaseMigrator, Field
from .records import ClientRecord, ProjectRecord

CLIENT_FIELDS = (
    Field("id", "id"),
    Field("name", "name"),
    Field("email", "email", ""),
    Field("phone", "phone", ""),
    Field("company", "company", ""),
    Field("rate", "rate", 0),
    Field("rate_type", "rateType", "project"),
    Field("status", "status", "active"),
    Field("notes", "notes", ""),
    Field("tags", "tags", []),
    Field("contacts", "contacts", []),
    Field("locations", "locations", []),
    Field("total_revenue", "totalRevenue", 0),
    Field("created_at", "createdAt", NOW),
    Field("updated_at", "updatedAt", NOW),
)

# client_id no sale del proyecto, lo pone _extract_projects()
PROJECT_FIELDS = (
    Field("id", "id"),
    Field("client_id", None),
    Field("name", "name"),
    Field("description", "description", ""),
    Field("status", "status", "active"),
    Field("value", "value", 0),
    Field("currency", "currency", "AUD"),
    Field("deadline", "deadline"),
    Field("location_id", "locationId"),
    Field("created_at", "createdAt", NOW),
    Field("updated_at", "updatedAt", NOW),
)


class ClientsMigrator(BaseMigrator):
    """Migrador específico para clients.json (+ projects derivados)."""

    entity = "clients"
    FIELDS = CLIENT_FIELDS

    def extract_data(self, doc):
        client_id = self.get_primary_key_from_doc(doc)
        projects, rejected = self._extract_projects(doc, client_id)

        return {
            "main": self._extract_main_record(doc),
            "related": {"projects": projects},
            "rejected": {"projects": rejected},
        }

    def initialize_batches(self):
        related = {name: [] for name in config.get_derived_entities(self.entity)}
        return {"main": [], "related": related}

    def _extract_main_record(self, doc) -> ClientRecord:
        return self.map_fields(doc)

    def _extract_projects(self, doc, client_id):
        """
        Returns:
            tuple: (lista de ProjectRecord, cantidad de proyectos descartados)
        """
        raw = doc.get("projects")
        if raw is None:
            return [], 0

        # projects que no es una lista (ej: 5, "x", {...}): se descarta el valor
        if not isinstance(raw, list):
            return [], 1

        # Cliente sin id: sus proyectos quedarían huérfanos
        if client_id is None:
            return [], len(raw)

        projects = []
        for project in raw:
            if not isinstance(project, dict):
                continue
            record: ProjectRecord = self.map_fields(project, PROJECT_FIELDS)
            record["client_id"] = client_id
            projects.append(record)

        return projects, len(raw) - len(projects)
