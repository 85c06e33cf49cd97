import logging

import pytest

from app.api.todo.label import services
from app.api.todo.label.schemas import LabelCreate, LabelUpdate
from app.api.todo.task import services as task_services
from app.core.errors import ConflictError, NotFoundError
from app.db.models.todo import Label, TaskLabel
from app.db.seed import DEFAULT_LABELS, seed_default_labels


def test_labels_listed_by_name(db, make_label) -> None:
    for name in ("Work", "Health", "Personal"):
        make_label(name)

    assert [label.name for label in services.get_labels(db)] == ["Health", "Personal", "Work"]


def test_duplicate_name_conflicts_without_insert(db, make_label) -> None:
    make_label("Work")

    with pytest.raises(ConflictError):
        services.create_label(db, LabelCreate(name="Work", color="#FFFFFF"))

    assert db.query(Label).count() == 1


def test_names_are_case_sensitive(db, make_label) -> None:
    make_label("Work")
    other = make_label("work")

    assert other.id is not None
    assert db.query(Label).count() == 2


def test_rename_to_taken_name_conflicts(db, make_label) -> None:
    make_label("Work")
    home = make_label("Home")

    with pytest.raises(ConflictError):
        services.update_label(db, home.id, LabelUpdate(name="Work"))

    assert services.get_label(db, home.id).name == "Home"


def test_rename_to_own_name_and_recolor(db, make_label) -> None:
    work = make_label("Work")

    updated = services.update_label(db, work.id, LabelUpdate(name="Work", color="#000000"))

    assert updated.name == "Work"
    assert updated.color == "#000000"


def test_partial_update_keeps_other_field(db, make_label) -> None:
    work = make_label("Work", "#0A84FF")

    updated = services.update_label(db, work.id, LabelUpdate(name="Job"))

    assert updated.name == "Job"
    assert updated.color == "#0A84FF"


def test_update_requires_a_field() -> None:
    with pytest.raises(ValueError):
        LabelUpdate()


def test_missing_label(db) -> None:
    with pytest.raises(NotFoundError):
        services.get_label(db, 1)
    with pytest.raises(NotFoundError):
        services.update_label(db, 1, LabelUpdate(color="#000000"))
    with pytest.raises(NotFoundError):
        services.delete_label(db, 1)
    with pytest.raises(NotFoundError):
        services.get_tasks_by_label(db, 1)


def test_delete_label_detaches_from_every_task(db, make_label, make_task) -> None:
    work = make_label("Work")
    urgent = make_label("Urgent")
    one = make_task("one", labels=[work.id, urgent.id])
    two = make_task("two", labels=[work.id])

    services.delete_label(db, work.id)

    assert [l.name for l in task_services.get_task(db, one.id).labels] == ["Urgent"]
    assert task_services.get_task(db, two.id).labels == []
    assert [l.name for l in services.get_labels(db)] == ["Urgent"]
    assert db.query(TaskLabel).filter(TaskLabel.label_id == work.id).count() == 0


def test_tasks_for_label_newest_first(db, make_label, make_task) -> None:
    work = make_label("Work")
    urgent = make_label("Urgent")
    make_task("older", labels=[work.id])
    make_task("unrelated", labels=[urgent.id])
    make_task("newer", labels=[work.id, urgent.id])

    tasks = services.get_tasks_by_label(db, work.id)

    assert [task.title for task in tasks] == ["newer", "older"]
    assert [l.name for l in tasks[0].labels] == ["Work", "Urgent"]


def test_seed_only_fills_empty_table(db, make_label) -> None:
    assert seed_default_labels(db) == len(DEFAULT_LABELS)
    assert seed_default_labels(db) == 0
    assert sorted(l.name for l in services.get_labels(db)) == sorted(
        label["name"] for label in DEFAULT_LABELS
    )


def test_seed_skips_when_labels_exist(db, make_label) -> None:
    make_label("Mine")

    assert seed_default_labels(db) == 0
    assert [l.name for l in services.get_labels(db)] == ["Mine"]


def test_create_race_still_conflicts(db, make_label, monkeypatch) -> None:
    make_label("Work")
    # Let the insert reach the unique constraint, as a concurrent writer would
    monkeypatch.setattr(services, "_ensure_name_free", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        services.create_label(db, LabelCreate(name="Work", color="#FFFFFF"))

    assert db.query(Label).count() == 1


def test_rename_race_still_conflicts(db, make_label, monkeypatch) -> None:
    make_label("Work")
    home = make_label("Home")
    monkeypatch.setattr(services, "_ensure_name_free", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError):
        services.update_label(db, home.id, LabelUpdate(name="Work"))

    assert services.get_label(db, home.id).name == "Home"


def test_constraint_race_is_logged_as_warning(db, make_label, monkeypatch, caplog) -> None:
    make_label("Work")
    monkeypatch.setattr(services, "_ensure_name_free", lambda *args, **kwargs: None)

    with caplog.at_level(logging.WARNING, logger="app.db.session"):
        with pytest.raises(ConflictError):
            services.create_label(db, LabelCreate(name="Work", color="#FFFFFF"))

    records = [r for r in caplog.records if r.name == "app.db.session"]
    assert records
    assert all(r.levelno == logging.WARNING for r in records)
    assert all(r.exc_info is None for r in records)
