# tests/test_engine.py
"""Tests for the query engine and its process-wide instance."""

import json
import random
import threading

import pytest

from etymograph.core import engine as engine_mod
from etymograph.core.config import Settings
from etymograph.core.engine import Engine, create_engine, get_engine, reset_engine
from etymograph.core.errors import DataUnavailableError, InvalidDepthError
from etymograph.core.hubs import HUB_THRESHOLD
from etymograph.core.sampling import SamplingEntry, SamplingTable, SamplingTableStore, load_table
from etymograph.core.word_index import load_index


DATA = {
    "a": {"definition": "A", "relatedWords": ["b", "c"]},
    "b": {"definition": "B", "relatedWords": ["a"]},
    "c": {"definition": "C", "relatedWords": ["a"]},
    "lonely": {"definition": "L", "relatedWords": []},
}


@pytest.fixture
def engine():
    return Engine(load_index(DATA))


@pytest.fixture
def data_files(tmp_path):
    data_path = tmp_path / "full-data.json"
    data_path.write_text(json.dumps(DATA))
    return Settings(data_path=str(data_path), stats_path=str(tmp_path / "word-stats.json"))


@pytest.fixture(autouse=True)
def clean_engine():
    reset_engine()
    yield
    reset_engine()


# === Graphs ===

def test_get_graph(engine):
    graph = engine.get_graph("a", 1)
    assert [(n.word, n.depth) for n in graph.nodes] == [("a", 0), ("b", 1), ("c", 1)]
    assert [e.to_dict() for e in graph.edges] == [{"from": "a", "to": "b"}, {"from": "a", "to": "c"}]


def test_get_graph_not_found(engine):
    assert engine.get_graph("nothing", 2).to_dict() == {"nodes": [], "edges": []}


@pytest.mark.parametrize("depth", [0, 4, -1])
def test_get_graph_invalid_depth(engine, depth):
    with pytest.raises(InvalidDepthError):
        engine.get_graph("a", depth)


def test_get_graph_idempotent(engine):
    first = json.dumps(engine.get_graph("a", 3).to_dict())
    second = json.dumps(engine.get_graph("a", 3).to_dict())
    assert first == second


def test_get_graph_prunes_hubs():
    kids = [f"x{i}" for i in range(1, HUB_THRESHOLD + 1)]
    data = {
        "r": {"definition": "", "relatedWords": ["h"]},
        "h": {"definition": "", "relatedWords": kids},
    }
    data.update({k: {"definition": "", "relatedWords": []} for k in kids})
    engine = Engine(load_index(data))

    graph = engine.get_graph("r", 2)
    assert [n.word for n in graph.nodes] == ["r", "h"]
    assert [e.to_dict() for e in graph.edges] == [{"from": "r", "to": "h"}]


# === Entries ===

def test_get_entry(engine):
    assert engine.get_entry(" B ").definition == "B"
    assert engine.get_entry("ghost") is None


# === Random words ===

def test_random_word_uses_table(engine):
    engine.table = SamplingTable([SamplingEntry("b", 1, 3, 1), SamplingEntry("c", 3, 3, 4)])
    rng = random.Random(7)
    picks = {engine.get_random_word(rng) for _ in range(200)}
    assert picks == {"b", "c"}


def test_random_word_fallback(engine):
    assert engine.table.is_empty
    assert engine.get_random_word() == "a"


def test_random_word_fallback_skips_unconnected():
    engine = Engine(load_index({
        "lonely": {"definition": "", "relatedWords": []},
        "z": {"definition": "", "relatedWords": ["ghost"]},
    }))
    assert engine.get_random_word() == "z"


def test_random_word_empty_index():
    assert Engine(load_index({})).get_random_word() is None


# === Rebuild ===

def test_rebuild_sampling_table(engine, tmp_path):
    path = tmp_path / "word-stats.json"
    table = engine.rebuild_sampling_table(path=path)
    assert [e.word for e in table.entries] == ["a", "b", "c"]
    assert table.total_weight == 4
    assert load_table(path).entries == table.entries
    # The serving table is left alone
    assert engine.table.is_empty


# === Process-wide instance ===

def test_create_engine_without_table(data_files):
    engine = create_engine(data_files)
    assert len(engine.index) == 4
    assert engine.table.is_empty


def test_create_engine_with_table(data_files):
    Engine(load_index(DATA)).rebuild_sampling_table(path=data_files.stats_path)
    engine = create_engine(data_files)
    assert engine.table.total_weight == 4


def test_create_engine_missing_data(tmp_path):
    settings = Settings(data_path=str(tmp_path / "missing.json"))
    with pytest.raises(DataUnavailableError):
        create_engine(settings)


def test_get_engine_loads_once(data_files, monkeypatch):
    calls = []
    real_load = engine_mod.load_index

    def counting_load(source):
        calls.append(source)
        return real_load(source)

    monkeypatch.setattr(engine_mod, "load_index", counting_load)

    results = []
    threads = [
        threading.Thread(target=lambda: results.append(get_engine(data_files)))
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(r is results[0] for r in results)


# === Sampling table sources ===

def test_create_engine_table_invalid_utf8(data_files):
    with open(data_files.stats_path, "wb") as f:
        f.write(b'\xff\xfe{"totalWeight": 0}')
    engine = create_engine(data_files)
    assert engine.table.is_empty
    assert engine.get_random_word() == "a"


def test_create_engine_malformed_table(data_files):
    with open(data_files.stats_path, "w") as f:
        f.write('{"totalWeight": 3, "words": []}')
    engine = create_engine(data_files)
    assert engine.table.is_empty
    assert engine.get_random_word() == "a"


def test_create_engine_prefers_store(data_files, fake_redis):
    store = SamplingTableStore(fake_redis)
    store.save(SamplingTable.from_weights([("c", 5, 3)]))
    Engine(load_index(DATA)).rebuild_sampling_table(path=data_files.stats_path)

    engine = create_engine(data_files, store)
    assert [e.word for e in engine.table.entries] == ["c"]
    assert engine.get_random_word() == "c"


def test_create_engine_store_miss_reads_file(data_files, fake_redis):
    Engine(load_index(DATA)).rebuild_sampling_table(path=data_files.stats_path)
    engine = create_engine(data_files, SamplingTableStore(fake_redis))
    assert engine.table.total_weight == 4


def test_create_engine_store_down_reads_file(data_files, down_redis):
    Engine(load_index(DATA)).rebuild_sampling_table(path=data_files.stats_path)
    engine = create_engine(data_files, SamplingTableStore(down_redis))
    assert engine.table.total_weight == 4


def test_create_engine_store_down_no_file(data_files, down_redis):
    engine = create_engine(data_files, SamplingTableStore(down_redis))
    assert engine.table.is_empty
    assert engine.get_random_word() == "a"
