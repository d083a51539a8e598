"""
Runner principal de tests.

Ejecuta los módulos de test por fases, en orden lógico, y reporta
resultados consolidados. Equivale a `pytest` pero corta en la primera
fase que falla (si la sintaxis está rota no tiene sentido seguir).

Uso:
    python tests/run_tests.py
"""

import os
import sys

import pytest

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.dirname(TESTS_DIR)
sys.path.insert(0, ROOT_DIR)

PHASES = [
    ("syntax", "📝 FASE 1: VALIDACIÓN DE SINTAXIS", ["test_syntax.py"]),
    ("config", "⚙️  FASE 2: CONFIGURACIÓN", ["test_config.py"]),
    ("interface", "🔌 FASE 3: VALIDACIÓN DE INTERFAZ", ["test_migrator_interface.py"]),
    ("schema", "🗄️  FASE 4: VALIDACIÓN DE SCHEMAS", ["test_schema_integrity.py"]),
    (
        "transform",
        "🔄 FASE 5: TRANSFORMACIONES Y ESCRITURA",
        ["test_transformers.py", "test_legacy_source.py", "test_batch_writer.py"],
    ),
    (
        "pipeline",
        "🚀 FASE 6: PIPELINE Y DESTINOS",
        ["test_destinations.py", "test_check_schema.py", "test_pipeline.py"],
    ),
]


def run_phase(files):
    paths = [os.path.join(TESTS_DIR, name) for name in files]
    return pytest.main(["-q", "--rootdir", ROOT_DIR, *paths]) == 0


def main():
    print("=" * 70)
    print("🚀 INICIANDO SUITE DE TESTS")
    print("=" * 70)

    results = {}

    for name, title, files in PHASES:
        print("\n" + "=" * 70)
        print(title)
        print("=" * 70)
        results[name] = run_phase(files)

        if not results[name]:
            print(f"\n⚠️  Fase '{name}' con errores. Corregir antes de continuar.")
            break

    print_summary(results)
    return all(results.values()) and len(results) == len(PHASES)


def print_summary(results):
    """Imprime resumen de resultados de tests."""
    print("\n" + "=" * 70)
    print("📊 RESUMEN DE TESTS")
    print("=" * 70)

    for test_name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"   {status}  {test_name.capitalize()}")

    print("=" * 70)

    if all(results.values()) and len(results) == len(PHASES):
        print("✅ TODOS LOS TESTS PASARON - Sistema listo para migración")
    else:
        print("❌ HAY TESTS FALLANDO - Corregir antes de migrar")

    print("=" * 70)


if __name__ == "__main__":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.exit(0 if main() else 1)
