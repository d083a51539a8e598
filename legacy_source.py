"""
Lectura de los archivos JSON de la app Kanban V1.

Un archivo por entidad en config.LEGACY_DATA_DIR. Un archivo faltante o
corrupto NO corta la migración: load() devuelve SourceLoad con data=None y
el motivo en `error`, y la etapa que llama lo trata como "sin datos".
"""

import json
from pathlib import Path
from typing import Any, NamedTuple, Optional

import config


class SourceLoad(NamedTuple):
    filename: str
    data: Any = None
    error: Optional[str] = None


class LegacySource:
    """
    Fuente de datos: directorio con los JSON exportados por la V1.

    Attributes:
        data_dir (Path): Directorio donde están clients.json, tasks.json, etc.
    """

    def __init__(self, data_dir=None):
        self.data_dir = Path(data_dir or config.LEGACY_DATA_DIR)

    def load(self, filename: str) -> SourceLoad:
        """
        Lee y parsea un archivo JSON.

        Args:
            filename: Nombre del archivo (ej: 'clients.json')

        Returns:
            SourceLoad: data con el JSON parseado, o error si no existe /
                        no se puede parsear
        """
        filepath = self.data_dir / filename

        if not filepath.is_file():
            return SourceLoad(filename, error=f"archivo no encontrado ({filepath})")

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return SourceLoad(filename, data=json.load(f))
        except json.JSONDecodeError as e:
            return SourceLoad(filename, error=f"JSON inválido en {filename}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            return SourceLoad(filename, error=f"no se pudo leer {filename}: {e}")

    def __repr__(self):
        return f"LegacySource({str(self.data_dir)!r})"
