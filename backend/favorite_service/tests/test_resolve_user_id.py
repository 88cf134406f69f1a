"""Тесты выбора userId для запроса."""

import pytest

from app.services.favorites import resolve_user_id
from config import DEFAULT_USER_ID


def test_default_user_when_nothing_given():
    assert resolve_user_id() == DEFAULT_USER_ID == "default_user"


def test_query_wins_over_body():
    assert resolve_user_id("alice", "bob") == "alice"


def test_body_used_when_query_missing():
    assert resolve_user_id(None, "bob") == "bob"


@pytest.mark.parametrize("query, body", [("", None), (None, ""), ("", "")])
def test_empty_strings_fall_back_to_default(query, body):
    assert resolve_user_id(query, body) == DEFAULT_USER_ID
