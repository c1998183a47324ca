import pytest
from sqlmodel import Session

from taskboard.errors import DuplicateEmail, NotFound
from taskboard.models import Task, TaskStatus
from taskboard.security import hash_password
from taskboard.stores import tasks as task_store
from taskboard.stores.users import authenticate_user, find_user_by_email, register_user


@pytest.fixture()
def owner(session):
    return register_user(session, "Alice", "alice@x.com", hash_password("secret1"))


@pytest.fixture()
def stranger(session):
    return register_user(session, "Bob", "bob@y.com", hash_password("secret1"))


def test_register_and_find_user(session, owner):
    found = find_user_by_email(session, "alice@x.com")

    assert found.id == owner.id
    assert found.hashed_password != "secret1"
    assert find_user_by_email(session, "nobody@x.com") is None


def test_register_duplicate_email(session, owner):
    with pytest.raises(DuplicateEmail):
        register_user(session, "Other", "alice@x.com", hash_password("different"))

    # The failed insert leaves the session usable.
    assert find_user_by_email(session, "alice@x.com").name == "Alice"


def test_authenticate_user(session, owner):
    assert authenticate_user(session, "alice@x.com", "secret1").id == owner.id
    assert authenticate_user(session, "alice@x.com", "wrong") is None
    assert authenticate_user(session, "ghost@x.com", "secret1") is None


def test_create_task_defaults_status(session, owner):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)

    assert task.status == TaskStatus.TODO.value
    assert task.owner_id == owner.id


def test_list_tasks_by_owner_and_status(session, owner, stranger):
    first = task_store.create_task(session, {"title": "one"}, owner.id)
    second = task_store.create_task(session, {"title": "two", "status": "done"}, owner.id)
    task_store.create_task(session, {"title": "theirs"}, stranger.id)

    assert {t.id for t in task_store.list_tasks(session, owner.id)} == {first.id, second.id}
    assert [t.id for t in task_store.list_tasks(session, owner.id, "done")] == [second.id]


def test_update_task_touches_updated_at(session, owner):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)
    created_at = task.updated_at

    updated = task_store.update_task(session, task.id, owner.id, {"title": "T2", "priority": "low"})

    assert updated.title == "T2"
    assert updated.priority == "low"
    assert updated.updated_at >= created_at


def test_update_task_status(session, owner):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)

    updated = task_store.update_task_status(session, task.id, owner.id, "in-progress")

    assert updated.status == "in-progress"


def test_delete_task_returns_last_state(session, owner):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)

    deleted = task_store.delete_task(session, task.id, owner.id)

    assert deleted.title == "T1"
    assert task_store.list_tasks(session, owner.id) == []


@pytest.mark.parametrize(
    "operation",
    [
        lambda s, task_id, owner_id: task_store.get_task(s, task_id, owner_id),
        lambda s, task_id, owner_id: task_store.update_task(s, task_id, owner_id, {"title": "x"}),
        lambda s, task_id, owner_id: task_store.update_task_status(s, task_id, owner_id, "done"),
        lambda s, task_id, owner_id: task_store.delete_task(s, task_id, owner_id),
    ],
)
def test_foreign_and_missing_tasks_raise_not_found(session, owner, stranger, operation):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)

    with pytest.raises(NotFound):
        operation(session, task.id, stranger.id)
    with pytest.raises(NotFound):
        operation(session, "missing", owner.id)

    assert task_store.get_task(session, task.id, owner.id).title == "T1"


def test_new_rows_carry_aware_timestamps(owner):
    task = Task(title="T1", owner_id=owner.id)

    assert task.created_at.tzinfo is not None
    assert task.updated_at.tzinfo is not None


def test_task_deleted_by_another_session_is_not_found(session, owner):
    task = task_store.create_task(session, {"title": "T1"}, owner.id)

    # The first session still holds the row in its identity map.
    with Session(session.get_bind()) as other:
        task_store.delete_task(other, task.id, owner.id)

    with pytest.raises(NotFound):
        task_store.update_task(session, task.id, owner.id, {"title": "T2"})
    with pytest.raises(NotFound):
        task_store.delete_task(session, task.id, owner.id)
