# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，使得：
- Flask-Migrate/Alembic 自动检测模型。
- 外部模块可简化引用：from models import Project, Task
注意：
- 避免循环导入：各模型仅在这里集中 import。
"""

from .mixins import TimestampMixin
from .user import User
from .project import Project
from .template import DefaultWorkstream, DefaultTaskTemplate
from .task import Task
from .attachment import TaskAttachment
from .contact import Contact
from .risk import Risk

__all__ = [
    "TimestampMixin",
    "User", "Project", "DefaultWorkstream", "DefaultTaskTemplate",
    "Task", "TaskAttachment", "Contact", "Risk",
]
