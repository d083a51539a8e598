"""Migrador para analytics.json (singleton de métricas agregadas)."""

from .base import NOW, Field, SingletonMigrator

ANALYTICS_FIELDS = (
    Field("id", None),  # lo pone SingletonMigrator.extract_data()
    Field("total_tasks_completed", "totalTasksCompleted", 0),
    Field("average_completion_time", "averageCompletionTime", 0),
    Field("on_time_completion_rate", "onTimeCompletionRate", 0),
    Field("productivity_by_hour", "productivityByHour", {}),
    Field(
        "priority_distribution",
        "priorityDistribution",
        {"low": 0, "medium": 0, "high": 0, "urgent": 0},
    ),
    Field("last_updated", "lastUpdated", NOW),
)


class AnalyticsMigrator(SingletonMigrator):
    entity = "analytics"
    FIELDS = ANALYTICS_FIELDS
