"""
Migrador para achievements.json (singleton de gamificación).

last_updated siempre es el momento de la migración: la V1 no lo guardaba
de forma confiable, así que se ignora el valor del archivo.
"""

from .base import NOW, Field, SingletonMigrator

ACHIEVEMENTS_FIELDS = (
    Field("id", None),  # lo pone SingletonMigrator.extract_data()
    Field("total_points", "totalPoints", 0),
    Field("level", "level", 1),
    Field("unlocked", "unlocked", []),
    Field("last_updated", None, NOW),
)


class AchievementsMigrator(SingletonMigrator):
    entity = "achievements"
    FIELDS = ACHIEVEMENTS_FIELDS
