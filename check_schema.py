"""
Verifica si las tablas de Kanban V2 existen en el destino.

NO escribe nada. Flujo:
1. Probar conectividad (ping). Si falla: imprimir pasos manuales y exit 1.
2. Para cada una de las 9 tablas, leer una fila → EXISTS / NOT FOUND.
3. Imprimir los pasos para crear el schema a mano.

Uso:
    python check_schema.py
"""

import sys

import config
from destinations import DestinationError, connect_destination


def check_connection(destination, out=None):
    """
    Prueba de conectividad.

    Returns:
        bool: True si el destino responde
    """
    out = out or sys.stdout
    print("🔌 Probando conexión al destino...\n", file=out)

    try:
        destination.ping()
    except DestinationError as e:
        print(f"❌ Falló la conexión: {e}", file=out)
        print_manual_steps(out=out)
        return False

    print("✅ Conexión exitosa\n", file=out)
    return True


def check_tables(destination, tables=None, out=None):
    """
    Intenta leer una fila de cada tabla esperada.

    Returns:
        dict: tabla → True si existe, False si no
    """
    out = out or sys.stdout
    print("📊 Revisando tablas existentes...\n", file=out)

    status = {}
    for table in tables or config.VERIFY_TABLES:
        try:
            rows = destination.read_one(table)
        except DestinationError:
            status[table] = False
            print(f"   ❌ {table}: NOT FOUND", file=out)
            continue

        status[table] = True
        print(f"   ✅ {table}: EXISTS ({len(rows)} filas leídas)", file=out)

    return status


def print_manual_steps(out=None):
    out = out or sys.stdout
    print("\n" + "=" * 70, file=out)
    print("PASOS MANUALES PARA CREAR EL SCHEMA:", file=out)
    print("=" * 70, file=out)
    print("1. Generar el script:   python dbsetup.py --print-sql > schema.sql", file=out)
    print("2. Abrir el SQL Editor del proyecto en https://supabase.com/dashboard", file=out)
    print("3. Pegar el contenido de schema.sql y ejecutar (Run)", file=out)
    print("   (PostgreSQL directo: python dbsetup.py)", file=out)
    print("4. Volver a verificar:  python check_schema.py", file=out)
    print("=" * 70 + "\n", file=out)


def main():
    try:
        missing = config.get_missing_credentials()
    except config.ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if missing:
        print("❌ Faltan credenciales del destino en el archivo .env", file=sys.stderr)
        print(f"   Variables: {', '.join(missing)}", file=sys.stderr)
        return 1

    try:
        destination = connect_destination()
    except DestinationError as e:
        print(f"❌ Falló la conexión: {e}", file=sys.stderr)
        print_manual_steps()
        return 1

    try:
        if not check_connection(destination):
            return 1
        check_tables(destination)
    finally:
        destination.close()

    print_manual_steps()
    return 0


if __name__ == "__main__":
    # Forzar UTF-8 en stdout/stderr para emojis en Windows
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
    sys.exit(main())
