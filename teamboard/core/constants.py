# teamboard/core/constants.py
"""
Закрытые перечисления домена и правила видимости полей по уровню проекта.
"""
from typing import Dict, FrozenSet, Tuple

# === СТАТУСЫ / ПРИОРИТЕТЫ ===

STATUS_NOT_STARTED = "NOT_STARTED"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"

PROJECT_STATUSES: Tuple[str, ...] = (STATUS_NOT_STARTED, STATUS_IN_PROGRESS, STATUS_COMPLETED)
PROJECT_PRIORITIES: Tuple[str, ...] = ("LOW", "MEDIUM", "HIGH", "URGENT")

DEFAULT_STATUS = STATUS_NOT_STARTED
DEFAULT_PRIORITY = "MEDIUM"

# === РОЛИ ===

# "member": устаревшее значение из старых записей
ASSIGNEE_ROLES: Tuple[str, ...] = ("lead", "main", "support", "member")
DEFAULT_ASSIGNEE_ROLE = "support"
USER_ROLES: Tuple[str, ...] = ("admin", "member")

# === КАЛЕНДАРЬ ===

EVENT_TYPES: Tuple[str, ...] = ("schedule", "meeting")

# === УРОВНИ ПРОЕКТА ===

LEVEL_TOP = 0
LEVEL_QUARTER = 1
LEVEL_SUB = 2

_LEVEL_0_FIELDS = frozenset({"name", "description", "goal", "key_results"})
_LEVEL_1_FIELDS = _LEVEL_0_FIELDS | {"priority", "assignee_ids", "assignees_with_tasks"}
_LEVEL_2_FIELDS = _LEVEL_1_FIELDS | {"status", "start_date", "end_date", "progress"}

LEVEL_FIELDS: Dict[int, FrozenSet[str]] = {
    LEVEL_TOP: _LEVEL_0_FIELDS,
    LEVEL_QUARTER: _LEVEL_1_FIELDS,
    LEVEL_SUB: _LEVEL_2_FIELDS,
}

# Поля, которые допустимы на любом уровне (структура дерева)
STRUCTURAL_FIELDS: FrozenSet[str] = frozenset({"parent_id"})
