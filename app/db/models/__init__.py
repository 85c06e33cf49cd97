# app/db/models/__init__.py
from .todo import Task, Label, TaskLabel
