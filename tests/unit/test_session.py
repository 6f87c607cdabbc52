"""Session cookie helpers."""

import uuid

from chat_widget.features.chat.session import (
    SESSION_MAX_AGE,
    generate_session_id,
    is_valid_session_id,
    resolve_session,
)


def test_generated_ids_are_uuid4():
    session_id = generate_session_id()

    assert is_valid_session_id(session_id)
    assert uuid.UUID(session_id).version == 4
    assert generate_session_id() != session_id


def test_rejects_other_values():
    assert not is_valid_session_id(None)
    assert not is_valid_session_id("")
    assert not is_valid_session_id("abc")
    assert not is_valid_session_id(str(uuid.uuid1()))
    assert not is_valid_session_id(generate_session_id() + "; Path=/")


def test_resolve_reuses_valid_session():
    current = generate_session_id()

    session_id, cookie = resolve_session(current, "site_chat_session", secure=True)

    assert session_id == current
    assert cookie is None


def test_resolve_issues_cookie():
    session_id, cookie = resolve_session(None, "site_chat_session", secure=True)

    assert cookie.value == session_id
    assert cookie.name == "site_chat_session"
    assert cookie.httponly is True
    assert cookie.secure is True
    assert cookie.samesite == "strict"
    assert cookie.max_age == SESSION_MAX_AGE == 3600
    assert cookie.path == "/"
