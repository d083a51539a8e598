"""
Migradores para transformar los JSON de Kanban V1 a las tablas de la V2.

Cada migrador implementa la interfaz BaseMigrator y se carga dinámicamente
en runtime según la entidad (ver load_migrator_for_entity en kanbanmigra.py).

Estructura:
    base.py: Clases abstractas BaseMigrator y SingletonMigrator, Field, NOW
    records.py: Forma canónica (TypedDict) de cada tabla destino
    clients.py: clients.json → clients + projects (derivados)
    tasks.py: tasks.json → tasks
    activity_log.py: activity.json → activity_log (en lotes de 1000)
    progress_logs.py: progress-logs.json → progress_logs
    schedule.py: schedule.json → schedule (genera ids faltantes)
    revenue.py: revenue.json (entries) → revenue
    analytics.py, achievements.py: singletons

Convención de nombres:
    entidad 'activity_log' → migrators/activity_log.py → ActivityLogMigrator

Interfaz requerida (ver BaseMigrator):
    - extract_data(doc)
    - initialize_batches()
    - get_primary_key_from_doc(doc)
    - extract_documents(raw)
    - insert_batches(batches, writer, result)
"""
