"""Tests for the frontend's token store."""

import json

import pytest

from frontend.token_store import STORAGE_KEY, TokenStore


@pytest.fixture
def store(tmp_path):
    return TokenStore(tmp_path / "storage.json")


def test_empty_store_loads_nothing(store):
    assert store.load() is None


@pytest.mark.parametrize(
    "tokens",
    [
        {"access_token": "ya29.a0Af"},
        {"access_token": "ya29.a0Af", "refresh_token": "1//0g-refresh"},
        {
            "access_token": "ya29 with spaces & symbols ✓",
            "refresh_token": "1//0g",
            "expiry": "2030-01-01T00:00:00Z",
        },
    ],
)
def test_saved_tokens_read_back_identical(store, tokens):
    store.save(tokens)
    assert store.load() == tokens
    # A new store on the same file sees the same pair, as after a reload
    assert TokenStore(store.storage_path).load() == tokens


def test_tokens_live_under_fixed_key(store):
    store.save({"access_token": "a"})
    data = json.loads(store.storage_path.read_text())
    assert list(data) == [STORAGE_KEY]
    assert json.loads(data[STORAGE_KEY]) == {"access_token": "a"}


def test_save_replaces_previous_pair(store):
    store.save({"access_token": "old", "refresh_token": "r"})
    store.save({"access_token": "new"})
    assert store.load() == {"access_token": "new"}


def test_clear_forgets_tokens(store):
    store.save({"access_token": "a"})
    store.clear()
    assert store.load() is None


def test_clear_keeps_other_keys(store):
    store.storage_path.write_text(json.dumps({"theme": "dark"}))
    store.save({"access_token": "a"})
    store.clear()
    assert json.loads(store.storage_path.read_text()) == {"theme": "dark"}


def test_save_requires_access_token(store):
    with pytest.raises(ValueError):
        store.save({"refresh_token": "r"})


def test_corrupt_file_loads_nothing(store):
    store.storage_path.write_text("{not json")
    assert store.load() is None


@pytest.mark.parametrize("content", ["[]", "null", '"googleTokens"', "42"])
def test_non_object_file_is_treated_as_empty(store, content):
    store.storage_path.write_text(content)
    assert store.load() is None
    store.clear()

    store.save({"access_token": "a"})
    assert store.load() == {"access_token": "a"}
