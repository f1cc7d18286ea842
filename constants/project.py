# -*- coding: utf-8 -*-
"""constants/project.py
--------------------------------------------------------------------
项目 / 任务相关的枚举常量。

- 任务状态固定四种：Not Started / In Progress / Complete / Blocked。
- 优先级四档，用于模板与任务。
- 为便于服务层校验，提供 values() 及 validate_* 辅助函数。
"""

from enum import Enum

from utils.exceptions import ValidationFailed


class TaskStatus(Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"
    BLOCKED = "Blocked"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


DEFAULT_TASK_STATUS = TaskStatus.NOT_STARTED.value

# “我的任务”排序：阻塞优先，其次进行中、未开始、已完成
TASK_STATUS_SORT_ORDER = {
    TaskStatus.BLOCKED.value: 0,
    TaskStatus.IN_PROGRESS.value: 1,
    TaskStatus.NOT_STARTED.value: 2,
    TaskStatus.COMPLETE.value: 3,
}


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


DEFAULT_PRIORITY = Priority.MEDIUM.value

PRIORITY_SORT_ORDER = {
    Priority.CRITICAL.value: 0,
    Priority.HIGH.value: 1,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 3,
}


class ProjectStatus(Enum):
    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETE = "Complete"
    CANCELLED = "Cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


DEFAULT_PROJECT_STATUS = ProjectStatus.ACTIVE.value


def validate_task_status(status: str) -> str:
    if status not in TaskStatus.values():
        raise ValidationFailed(f"Invalid task status: {status}")
    return status


def validate_priority(priority: str) -> str:
    if priority not in Priority.values():
        raise ValidationFailed(f"Invalid priority: {priority}")
    return priority


def validate_project_status(status: str) -> str:
    if status not in ProjectStatus.values():
        raise ValidationFailed(f"Invalid project status: {status}")
    return status


def validate_percent_complete(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailed("percent_complete must be an integer")
    if value < 0 or value > 100:
        raise ValidationFailed("percent_complete must be between 0 and 100")
    return value
