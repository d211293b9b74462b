# tests/test_word_index.py
"""Tests for dataset loading and the word index."""

import json

import pytest

from etymograph.core.errors import DataFormatError, DataUnavailableError
from etymograph.core.word_index import WordEntry, WordIndex, load_index, normalize


def test_normalize():
    assert normalize("  Apple ") == "apple"
    assert normalize("ROOT") == "root"


def test_load_from_mapping():
    index = load_index({
        "Water": {"definition": "H2O", "relatedWords": ["wet", "ghost"]},
        "wet": {"definition": "not dry", "relatedWords": []},
    })
    assert len(index) == 2
    assert "water" in index
    assert index["water"] == WordEntry("H2O", ("wet", "ghost"))


def test_lookup_normalizes():
    index = load_index({"water": {"definition": "H2O", "relatedWords": []}})
    assert index.lookup("  WATER ").definition == "H2O"
    assert index.lookup("fire") is None


def test_iteration_follows_source_order():
    data = {w: {"definition": w, "relatedWords": []} for w in ["c", "a", "b"]}
    assert list(load_index(data)) == ["c", "a", "b"]


def test_load_from_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"a": {"definition": "A", "relatedWords": ["b"]}}))
    index = load_index(path)
    assert index["a"].related_words == ("b",)


def test_missing_file(tmp_path):
    with pytest.raises(DataUnavailableError):
        load_index(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json")
    with pytest.raises(DataFormatError):
        load_index(path)


@pytest.mark.parametrize("data", [
    ["a", "b"],
    {"a": "just a string"},
    {"a": {"definition": "A"}},
    {"a": {"definition": "A", "relatedWords": "b"}},
    {"a": {"definition": 3, "relatedWords": []}},
])
def test_malformed_dataset(data):
    with pytest.raises(DataFormatError):
        WordIndex.from_dict(data)


def test_duplicate_after_normalization():
    with pytest.raises(DataFormatError):
        load_index({
            "Apple": {"definition": "1", "relatedWords": []},
            "apple": {"definition": "2", "relatedWords": []},
        })


def test_entry_is_immutable():
    entry = WordEntry("A", ("b",))
    with pytest.raises(AttributeError):
        entry.definition = "B"
    assert entry.to_dict() == {"definition": "A", "relatedWords": ["b"]}


def test_invalid_utf8(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"a": {"definition": "\xff\xfe", "relatedWords": []}}')
    with pytest.raises(DataFormatError):
        load_index(path)


def test_get_normalizes():
    index = load_index({"water": {"definition": "H2O", "relatedWords": []}})
    assert index.get("  WATER ").definition == "H2O"
    assert index.get("fire") is None
    assert index.get("fire", WordEntry("none")) == WordEntry("none")
