import json

import pytest

from minicc.core import (
    AssistantMessage,
    Session,
    SessionStore,
    StorageError,
    ToolCall,
    ToolCallFunction,
    ToolMessage,
    UserMessage,
)


def test_create_persists_empty_session(session_store: SessionStore) -> None:
    session = session_store.create("abc")

    assert session.id == "abc"
    assert session.name == "Session_abc"
    assert session.messages == []
    assert (session_store.history_dir / "abc.json").is_file()
    assert session_store.list() == ["abc"]


def test_get_missing_session_returns_none(session_store: SessionStore) -> None:
    assert session_store.get("nope") is None


def test_get_is_idempotent(session_store: SessionStore) -> None:
    session_store.create("abc")
    assert session_store.get("abc") is session_store.get("abc")


def test_round_trip_from_disk_preserves_messages(tmp_path) -> None:
    history_dir = tmp_path / "history"
    store = SessionStore(history_dir)
    session = store.create("s1")
    call = ToolCall(id="call_1", function=ToolCallFunction(name="frobnicate", arguments='{"x": 1}'))
    session.messages.extend(
        [
            UserMessage(content="Please frobnicate"),
            AssistantMessage(tool_calls=[call]),
            ToolMessage(content='{"success": true, "data": 42}', tool_call_id="call_1", name="frobnicate"),
            AssistantMessage(content="Done"),
        ]
    )
    store.save(session)

    reloaded = SessionStore(history_dir).get("s1")

    assert reloaded is not None
    assert reloaded is not session
    assert [m.role for m in reloaded.messages] == ["user", "assistant", "tool", "assistant"]
    assert reloaded.messages[1].tool_calls[0].id == "call_1"
    assert reloaded.messages[2].tool_call_id == "call_1"
    assert reloaded.start_time == session.start_time


def test_saved_file_uses_camel_case_timestamps(session_store: SessionStore) -> None:
    session_store.create("abc")

    data = json.loads((session_store.history_dir / "abc.json").read_text(encoding="utf-8"))

    assert data["id"] == "abc"
    assert "startTime" in data
    assert "lastUpdateTime" in data
    assert data["messages"] == []


def test_loads_hand_written_session_file(session_store: SessionStore) -> None:
    (session_store.history_dir / "legacy.json").write_text(
        json.dumps(
            {
                "id": "legacy",
                "startTime": "2024-01-01T10:00:00.000Z",
                "lastUpdateTime": "2024-01-01T10:05:00.000Z",
                "messages": [
                    {"role": "user", "content": "hi", "timestamp": "2024-01-01T10:00:00.000Z"},
                    {"role": "assistant", "content": "hello", "timestamp": "2024-01-01T10:00:01.000Z"},
                ],
                "context": {"cwd": "/tmp"},
            }
        ),
        encoding="utf-8",
    )

    session = session_store.get("legacy")

    assert session is not None
    assert len(session.messages) == 2
    assert session.context == {"cwd": "/tmp"}


def test_save_updates_last_update_time(session_store: SessionStore) -> None:
    session = session_store.create("abc")
    first = session.last_update_time

    session.messages.append(UserMessage(content="later"))
    session_store.save(session)

    assert session.last_update_time >= first
    assert session.last_update_time >= session.start_time


def test_corrupt_file_is_reported_as_missing(session_store: SessionStore) -> None:
    (session_store.history_dir / "broken.json").write_text("{not json", encoding="utf-8")

    assert session_store.get("broken") is None
    assert session_store.summarize("broken") is None
    assert session_store.list() == ["broken"]
    assert session_store.list_details() == []


def test_delete_removes_session_and_ignores_missing(session_store: SessionStore) -> None:
    session_store.create("abc")

    session_store.delete("abc")
    session_store.delete("abc")
    session_store.delete("never-existed")

    assert session_store.get("abc") is None
    assert session_store.list() == []


def test_clear_all(session_store: SessionStore) -> None:
    for session_id in ("a", "b", "c"):
        session_store.create(session_id)

    session_store.clear_all()

    assert session_store.list() == []
    assert session_store.get("a") is None


def test_list_is_sorted(session_store: SessionStore) -> None:
    for session_id in ("b", "c", "a"):
        session_store.create(session_id)

    assert session_store.list() == ["a", "b", "c"]


def test_summarize_uses_last_user_message_excerpt(session_store: SessionStore) -> None:
    session = session_store.create("abc")
    session.messages.extend(
        [
            UserMessage(content="first question"),
            AssistantMessage(content="answer"),
            UserMessage(content="x" * 80),
            AssistantMessage(content="another answer"),
        ]
    )
    session_store.save(session)

    summary = session_store.summarize("abc")

    assert summary is not None
    assert summary.message_count == 4
    assert summary.last_message == "x" * SessionStore.EXCERPT_LENGTH
    assert summary.start_time == session.start_time


def test_summarize_without_user_messages(session_store: SessionStore) -> None:
    session_store.create("empty")

    summary = session_store.summarize("empty")

    assert summary is not None
    assert summary.message_count == 0
    assert summary.last_message is None


def test_most_recent(session_store: SessionStore) -> None:
    assert session_store.most_recent() is None

    session_store.create("old")
    newer = session_store.create("new")
    newer.messages.append(UserMessage(content="bump"))
    session_store.save(newer)

    assert session_store.most_recent() == "new"


@pytest.mark.parametrize("bad_id", ["", ".", "..", "../escape", "a/b", "a\\b"])
def test_invalid_session_ids(session_store: SessionStore, bad_id: str) -> None:
    assert session_store.get(bad_id) is None

    with pytest.raises(StorageError):
        session_store.create(bad_id)

    with pytest.raises(StorageError):
        session_store.delete(bad_id)


def test_write_failure_raises_storage_error(session_store: SessionStore, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("minicc.core.sessions.store.os.replace", failing_replace)

    with pytest.raises(StorageError, match="disk full"):
        session_store.save(Session(id="abc"))

    assert session_store.get("abc") is None
