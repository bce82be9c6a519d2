import pytest
from pydantic import ValidationError

from notebox.core.errors import ErrorKind, error_body
from notebox.core.schemas import (
    ErrorResponse,
    NoteCreate,
    NoteUpdate,
    PinUpdate,
    SignupRequest,
    error_responses,
)


def test_note_create_trims_and_defaults_tags():
    note = NoteCreate(title="  Groceries ", content=" milk, eggs ")
    assert note.title == "Groceries"
    assert note.content == "milk, eggs"
    assert note.tags == []


@pytest.mark.parametrize("field", ["title", "content"])
def test_note_create_rejects_blank(field):
    data = {"title": "t", "content": "c"}
    data[field] = "   "
    with pytest.raises(ValidationError):
        NoteCreate(**data)


def test_note_create_rejects_long_title_and_tags():
    with pytest.raises(ValidationError):
        NoteCreate(title="x" * 201, content="c")
    with pytest.raises(ValidationError):
        NoteCreate(title="t", content="c", tags=["x" * 51])
    with pytest.raises(ValidationError):
        NoteCreate(title="t", content="c", tags=[f"t{i}" for i in range(51)])


def test_note_update_has_changes():
    assert not NoteUpdate().has_changes()
    assert NoteUpdate(tags=[]).has_changes()
    assert NoteUpdate(title="new").has_changes()


def test_pin_update_accepts_both_keys():
    assert PinUpdate.model_validate({"is_pinned": True}).is_pinned is True
    assert PinUpdate.model_validate({"isPinned": False}).is_pinned is False


def test_signup_normalizes_email_and_username():
    req = SignupRequest(username="  Jane ", email="Jane@Example.com", password="longenough")
    assert req.username == "Jane"
    assert req.email == "jane@example.com"


def test_signup_rejects_short_password_and_bad_email():
    with pytest.raises(ValidationError):
        SignupRequest(username="jane", email="jane@example.com", password="short")
    with pytest.raises(ValidationError):
        SignupRequest(username="jane", email="not-an-email", password="longenough")


def test_error_response_matches_handler_body():
    body = error_body(ErrorKind.NOT_FOUND, "Note not found")
    parsed = ErrorResponse.model_validate(body)
    assert parsed.statusCode == 404
    assert parsed.model_dump(exclude_none=True) == body
    assert error_responses(401, 404) == {
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
