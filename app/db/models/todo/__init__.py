# app/db/models/todo/__init__.py
from .task import Task, TaskStatus, TaskPriority
from .label import Label
from .task_label import TaskLabel
