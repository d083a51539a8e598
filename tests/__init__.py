"""
Suite de tests para la migración Kanban V1 → V2.

Los tests NO tocan un destino real: usan InMemoryDestination (helpers.py)
y archivos JSON temporales. Validan:
- Sintaxis de código Python
- Implementación correcta de interfaces
- Coherencia entre migradores, tipos de registro y dbsetup.SCHEMA
- Transformaciones, lotes, pipeline completo y verificación de schema
"""
