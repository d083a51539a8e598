"""
Presentación en consola de los resultados de la migración.

Es la única parte del pipeline que imprime: las etapas devuelven objetos de
results.py y acá se convierten en texto. Los errores van a stderr.
"""

import sys

from results import FAILED, MIGRATED, PARTIAL

ICONS = {
    "clients": "📋",
    "projects": "📂",
    "tasks": "✅",
    "activity_log": "📜",
    "progress_logs": "📊",
    "schedule": "📅",
    "revenue": "💰",
    "analytics": "📈",
    "achievements": "🏆",
}

LINE = "=" * 70


def print_banner(source, destination):
    print(LINE)
    print("🚀 MIGRACIÓN KANBAN V1 (JSON) → V2")
    print(LINE)
    print(f"📦 Origen: {source}")
    print(f"🎯 Destino: {destination}")
    print(LINE)


def print_table_result(result, out=None, err=None):
    """Imprime el resultado de una tabla apenas termina de migrarse."""
    out = out or sys.stdout
    err = err or sys.stderr
    icon = ICONS.get(result.table, "📦")

    print(f"\n{icon} Migrando {result.table}...", file=out)

    if result.found:
        print(f"   Encontrados: {result.found:,}", file=out)
    if result.rejected:
        print(
            f"   ⚠️  {result.rejected:,} registro(s) descartado(s) (sin id o formato inválido)",
            file=out,
        )

    if result.status in (MIGRATED, PARTIAL, FAILED):
        chunked = len(result.chunks) > 1
        for chunk in result.chunks:
            label = f"lote {chunk.index}" if chunked else result.table
            if chunk.ok:
                if chunked:
                    print(f"   ✅ Lote {chunk.index} migrado ({chunk.size:,} registros)", file=out)
            else:
                print(f"   ❌ Error migrando {label}: {chunk.error}", file=err)

        if result.status == MIGRATED:
            print(f"   ✅ Migrados {result.written:,} registros en {result.table}", file=out)
        elif result.status == PARTIAL:
            print(
                f"   ⚠️  Migración parcial: {result.written:,} ok, {result.failed:,} con error",
                file=out,
            )
        return

    # SKIPPED
    if result.error:
        print(f"   ⚠️  No se pudo cargar el origen: {result.error}", file=err)
    print(f"   ℹ️  Sin registros para migrar en {result.table}", file=out)


def print_verification(results, out=None):
    out = out or sys.stdout
    print("\n🔍 Verificando migración...", file=out)
    for result in results:
        if result.error:
            print(f"   ❌ {result.table}: ERROR - {result.error}", file=out)
        else:
            print(f"   ✅ {result.table}: {result.count:,} filas", file=out)


def print_summary(report, out=None):
    """Resumen final: tabla por tabla y estado global."""
    out = out or sys.stdout
    print("\n" + LINE, file=out)
    print("📊 RESUMEN", file=out)
    print(LINE, file=out)

    for result in report.tables:
        status = {
            MIGRATED: "✅",
            PARTIAL: "⚠️ ",
            FAILED: "❌",
        }.get(result.status, "⏭️ ")
        print(
            f"   {status} {result.table:<15} {result.status:<9} "
            f"escritos={result.written:<6} con error={result.failed:<6} "
            f"descartados={result.rejected}",
            file=out,
        )

    print(LINE, file=out)
    if report.has_failures:
        print("⚠️  MIGRACIÓN COMPLETADA CON ERRORES (ver detalle arriba)", file=out)
    else:
        print("✅ MIGRACIÓN COMPLETADA EXITOSAMENTE", file=out)
    print(LINE, file=out)


def print_next_steps(out=None):
    out = out or sys.stdout
    print("\nPróximos pasos:", file=out)
    print("  1. Revisar los datos en el dashboard del destino", file=out)
    print("  2. Abrir public/index.html para probar la V2 localmente", file=out)
    print("  3. Publicar la V2: npm run deploy", file=out)


def render_report(report, out=None):
    """Imprime verificación y resumen de un MigrationReport completo."""
    print_verification(report.verification, out=out)
    print_summary(report, out=out)
    if not report.has_failures:
        print_next_steps(out=out)
