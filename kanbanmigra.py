r"""
Script principal de migración Kanban V1 (archivos JSON) → V2 (Supabase/PostgreSQL).

Arquitectura con carga dinámica de migradores:
- kanbanmigra.py: Orquestación (conexión, orden, verificación, exit code)
- migrators/*.py: Lógica específica por entidad (implementan BaseMigrator)
- batch_writer.py: Upserts idempotentes, en lotes cuando corresponde
- report.py: Todo lo que se imprime en consola
- config.py: Configuración centralizada de entidades

Flujo de ejecución:
1. Validar credenciales del destino (si faltan: exit 1 sin hacer nada)
2. Para cada entidad de config.MIGRATION_ORDER:
   cargar JSON → transformar → upsert (un fallo NO corta la migración)
3. Contar filas de cada tabla destino (verificación)
4. Imprimir resumen

Prerrequisitos:
- Tablas creadas en el destino (ver check_schema.py y dbsetup.py)
- .env con SUPABASE_URL y SUPABASE_SERVICE_KEY (o POSTGRES_*)

Uso:
    python kanbanmigra.py                       # todas las entidades
    python kanbanmigra.py clients tasks         # solo algunas
    python kanbanmigra.py --data-dir ../v1/data # otro directorio de origen

Exit codes:
    0: Todo migrado (o sin datos)
    1: Configuración o conexión inválida, no se migró nada
    2: Migración completa pero con tablas fallidas o verificación con errores
"""

import argparse
import importlib
import sys

import config
import report
from batch_writer import BatchWriter
from destinations import DestinationError, connect_destination, describe_destination
from legacy_source import LegacySource
from migrators.base import BaseMigrator, SingletonMigrator
from results import MigrationReport, VerificationResult

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PARTIAL_FAILURE = 2


def load_migrator_for_entity(entity_name, **kwargs):
    """
    Carga dinámicamente el migrador correspondiente a una entidad.

    Convención de nombres:
        clients → migrators.clients → ClientsMigrator
        activity_log → migrators.activity_log → ActivityLogMigrator

    Args:
        entity_name: Nombre de la entidad en config.ENTITIES
        **kwargs: Se pasan al constructor (ej: timestamp)

    Returns:
        BaseMigrator: Instancia del migrador específico

    Raises:
        KeyError: Si la entidad no está configurada
        ImportError: Si no existe el módulo o la clase
        TypeError: Si la clase no hereda de BaseMigrator
            (o de SingletonMigrator si la entidad es singleton)
    """
    config.get_entity_config(entity_name)

    class_name = (
        "".join(word.capitalize() for word in entity_name.split("_")) + "Migrator"
    )

    module = importlib.import_module(f"migrators.{entity_name}")
    migrator_class = getattr(module, class_name, None)
    if migrator_class is None:
        raise ImportError(
            f"El módulo migrators.{entity_name} no tiene la clase '{class_name}'"
        )

    # Verificar que hereda de BaseMigrator (type safety en runtime)
    if not issubclass(migrator_class, BaseMigrator):
        raise TypeError(f"{class_name} no hereda de BaseMigrator")
    if config.is_singleton(entity_name) and not issubclass(migrator_class, SingletonMigrator):
        raise TypeError(f"{class_name} es singleton y no hereda de SingletonMigrator")

    return migrator_class(**kwargs)


def verify_migration(destination, tables=None):
    """
    Cuenta las filas de cada tabla destino.

    Solo observa: un error en una tabla queda en su VerificationResult y se
    sigue con la siguiente.

    Returns:
        list[VerificationResult]
    """
    results = []
    for table in tables or config.VERIFY_TABLES:
        try:
            results.append(VerificationResult(table, count=destination.count(table)))
        except DestinationError as e:
            results.append(VerificationResult(table, error=str(e)))
    return results


def run_migration(source, destination, entities=None, progress=None, timestamp=None):
    """
    Ejecuta la migración completa de forma secuencial.

    Args:
        source: LegacySource con los JSON de la V1
        destination: destinations.Destination
        entities: Subconjunto de config.MIGRATION_ORDER (default: todas)
        progress: Callable opcional llamado con cada TableResult al terminar
        timestamp: Timestamp fijo para los defaults NOW (default: ahora)

    Returns:
        MigrationReport
    """
    writer = BatchWriter(destination)
    result = MigrationReport(
        source=str(getattr(source, "data_dir", source)),
        destination=getattr(destination, "name", "destino"),
    )

    selected = entities or config.MIGRATION_ORDER
    for entity_name in config.MIGRATION_ORDER:
        if entity_name not in selected:
            continue

        migrator = load_migrator_for_entity(entity_name, timestamp=timestamp)
        for table_result in migrator.migrate(source, writer):
            result.tables.append(table_result)
            if progress:
                progress(table_result)

    result.verification = verify_migration(destination)
    return result


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser que levanta ValueError en vez de terminar el proceso."""

    def error(self, message):
        raise ValueError(message)


def build_parser():
    parser = _ArgumentParser(
        prog="kanbanmigra.py",
        description="Migración Kanban V1 (archivos JSON) → V2 (Supabase/PostgreSQL)",
    )
    parser.add_argument(
        "entities",
        nargs="*",
        default=[],
        metavar="ENTIDAD",
        help=f"Entidades a migrar (default: todas). Disponibles: {', '.join(config.MIGRATION_ORDER)}",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help=f"Directorio con los JSON de la V1 (default: {config.LEGACY_DATA_DIR})",
    )
    return parser


def parse_args(argv):
    """
    Parsea argumentos de línea de comandos.

    Returns:
        tuple: (data_dir o None, lista de entidades)

    Raises:
        ValueError: Si hay una entidad desconocida o un argumento inválido
    """
    # Entidades y --data-dir pueden ir en cualquier orden
    args = build_parser().parse_intermixed_args(argv)

    unknown = [e for e in args.entities if e not in config.MIGRATION_ORDER]
    if unknown:
        available = ", ".join(config.MIGRATION_ORDER)
        raise ValueError(f"Entidad desconocida '{unknown[0]}'. Disponibles: {available}")

    return args.data_dir, list(args.entities)


def main(argv=None):
    """
    Punto de entrada. Retorna el exit code (ver docstring del módulo).
    """
    try:
        data_dir, entities = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        missing = config.get_missing_credentials()
    except config.ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if missing:
        print("❌ Faltan credenciales del destino en el archivo .env", file=sys.stderr)
        print(f"   Variables: {', '.join(missing)}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    source = LegacySource(data_dir)
    report.print_banner(source.data_dir.resolve(), describe_destination())

    try:
        print("🔌 Conectando al destino...")
        destination = connect_destination()
    except (config.ConfigError, DestinationError) as e:
        print("❌ Error de conexión al destino", file=sys.stderr)
        print(f"   Detalle: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        migration = run_migration(
            source, destination, entities=entities, progress=report.print_table_result
        )
    finally:
        destination.close()

    report.render_report(migration)
    return EXIT_PARTIAL_FAILURE if migration.has_failures else EXIT_OK


if __name__ == "__main__":
    # Forzar UTF-8 en stdout/stderr para emojis en Windows
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
    sys.exit(main())
