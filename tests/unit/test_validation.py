from __future__ import annotations

import pytest

from relay_service.application.exceptions import InvalidNameError, MessageValidationError
from relay_service.application.policies.validation import normalize_name, validate_message
from tests.conftest import make_message


def test_normalize_name_strips_whitespace():
    assert normalize_name("  Alice ") == "Alice"


@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
def test_normalize_name_rejects_blank(raw):
    with pytest.raises(InvalidNameError):
        normalize_name(raw)


def test_validate_message_accepts_all_kinds():
    for kind in ("broadcast", "direct", "status"):
        validate_message(make_message(kind=kind))


def test_validate_message_rejects_unknown_kind():
    with pytest.raises(MessageValidationError) as exc_info:
        validate_message(make_message(kind="private_message"))

    assert exc_info.value.errors == ["kind must be one of: broadcast, direct, status"]


def test_validate_message_reports_every_missing_field():
    msg = make_message(recipient="", text=" ", kind=None)

    with pytest.raises(MessageValidationError) as exc_info:
        validate_message(msg)

    assert exc_info.value.errors[:2] == ["recipient is required", "text is required"]
    assert len(exc_info.value.errors) == 3
