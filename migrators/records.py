"""
Forma canónica de los registros destino, una por tabla.

Las columnas deben coincidir con las tablas de dbsetup.SCHEMA y con las
tablas FIELDS de cada migrador (lo valida tests/test_schema_integrity.py).
"""

from typing import Any, Dict, List, Optional, TypedDict


class ClientRecord(TypedDict):
    id: str
    name: Optional[str]
    email: str
    phone: str
    company: str
    rate: float
    rate_type: str
    status: str
    notes: str
    tags: List[Any]
    contacts: List[Any]
    locations: List[Any]
    total_revenue: float
    created_at: str
    updated_at: str


class ProjectRecord(TypedDict):
    id: str
    client_id: str
    name: Optional[str]
    description: str
    status: str
    value: float
    currency: str
    deadline: Optional[str]
    location_id: Optional[str]
    created_at: str
    updated_at: str


class TaskRecord(TypedDict):
    id: str
    title: Optional[str]
    description: str
    priority: str
    status: str
    assignee: str
    estimated_minutes: Optional[int]
    deadline: Optional[str]
    subtasks: List[Any]
    tags: Any  # En la V1 es un string separado por comas
    client_id: Optional[str]
    project_id: Optional[str]
    calendar_event_id: Optional[str]
    scheduled_start: Optional[str]
    scheduled_end: Optional[str]
    time_tracked: int
    time_sessions: List[Any]
    created_at: str
    updated_at: str
    completed_at: Optional[str]


class ActivityLogRecord(TypedDict):
    id: str
    type: Optional[str]
    description: Optional[str]
    metadata: Dict[str, Any]
    timestamp: Optional[str]


class ProgressLogRecord(TypedDict):
    id: str
    task_id: Optional[str]
    task_title: Optional[str]
    status: Optional[str]
    comment: str
    actual_minutes: Optional[int]
    timestamp: Optional[str]


class ScheduleRecord(TypedDict):
    id: str
    task_id: Optional[str]
    task_title: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    created_at: str


class RevenueRecord(TypedDict):
    id: str
    client_id: Optional[str]
    client_name: Optional[str]
    project_id: Optional[str]
    project_name: Optional[str]
    amount: Optional[float]
    month: Any
    year: Optional[int]
    date: Optional[str]
    notes: str
    type: str


class AnalyticsRecord(TypedDict):
    id: str
    total_tasks_completed: int
    average_completion_time: float
    on_time_completion_rate: float
    productivity_by_hour: Dict[str, Any]
    priority_distribution: Dict[str, int]
    last_updated: str


class AchievementsRecord(TypedDict):
    id: str
    total_points: int
    level: int
    unlocked: List[Any]
    last_updated: str


# Tabla destino → tipo de registro
RECORD_TYPES = {
    "clients": ClientRecord,
    "projects": ProjectRecord,
    "tasks": TaskRecord,
    "activity_log": ActivityLogRecord,
    "progress_logs": ProgressLogRecord,
    "schedule": ScheduleRecord,
    "revenue": RevenueRecord,
    "analytics": AnalyticsRecord,
    "achievements": AchievementsRecord,
}
