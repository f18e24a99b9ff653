"""Shared pytest fixtures for SWeb tests."""

import logging

import pytest

from sweb.core import ir
from sweb.core.parser import parse_source

TASK_SOURCE = """
// Task tracker
model Task {
  field title: text required;
  field estimate: number default = 1;
  field done: boolean default = false;
  field due: date;
}

form NewTask(Task) { title, estimate, done }
list AllTasks(Task) { }
view TaskCards(Task) { title, done }

page Home("Task Tracker") { NewTask, AllTasks, TaskCards }
"""


@pytest.fixture(autouse=True)
def reset_sweb_logger():
    """Undo handler changes made by setup_logging (CLI tests install handlers)."""
    yield
    root = logging.getLogger("sweb")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def task_source() -> str:
    """Return a small but complete SWeb program."""
    return TASK_SOURCE


@pytest.fixture
def task_app(task_source: str) -> ir.AppSpec:
    """Return the parsed task program."""
    return parse_source(task_source)


@pytest.fixture
def task_model() -> ir.ModelSpec:
    """Return a Task model built directly from IR types."""
    return ir.ModelSpec(
        name="Task",
        fields=[
            ir.FieldSpec(name="title", type="text", required=True),
            ir.FieldSpec(name="estimate", type="number", default=1),
            ir.FieldSpec(name="done", type="boolean", default=False),
        ],
    )
