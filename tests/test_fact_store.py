"""Tests for the fact store: insertion, transitive queries, persistence."""

import json

import pytest

from sillogismi import Fact, FactStore, MalformedStoreError, default_lexicon


def _store(*edges, **kwargs) -> FactStore:
    store = FactStore(**kwargs)
    for subject, attribute in edges:
        store.store(subject, attribute)
    return store


class TestStore:
    def test_subject_key_upper_cased_attribute_as_written(self):
        store = _store(("gatto", "Animale"))
        assert store.subjects() == ["GATTO"]
        assert store.attributes("GaTtO") == ["Animale"]

    def test_duplicate_any_case_is_ignored(self):
        store = FactStore()
        assert store.store("gatto", "animale") is True
        assert store.store("GATTO", "ANIMALE") is False
        assert store.attributes("gatto") == ["animale"]

    def test_attributes_keep_insertion_order(self):
        store = _store(("gatto", "felino"), ("gatto", "mammifero"), ("gatto", "animale"))
        assert store.attributes("gatto") == ["felino", "mammifero", "animale"]

    def test_len_contains_and_facts(self):
        store = _store(("a", "b"), ("a", "c"), ("b", "c"))
        assert len(store) == 2
        assert "A" in store and "b" in store
        assert "c" not in store
        assert list(store.facts()) == [Fact("A", "b"), Fact("A", "c"), Fact("B", "c")]

    def test_to_dict_is_a_copy(self):
        store = _store(("a", "b"))
        snapshot = store.to_dict()
        snapshot["A"].append("x")
        assert store.attributes("a") == ["b"]


class TestForwardQuery:
    def test_unknown_subject(self):
        assert FactStore().query("nessuno") == []

    def test_transitive(self):
        store = _store(("A", "B"), ("B", "C"))
        assert store.query("A") == ["B", "C"]
        assert store.query("a") == ["B", "C"]

    def test_direct_attributes_before_expansion(self):
        store = _store(("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"), ("D", "F"))
        assert store.query("A") == ["B", "C", "D", "F", "E"]

    def test_same_order_as_legacy_on_trees(self):
        edges = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"), ("D", "F"), ("E", "G")]
        guarded = _store(*edges)
        legacy = _store(*edges, legacy_traversal=True)
        assert guarded.query("A") == legacy.query("A")

    def test_shared_descendant_reported_once(self):
        edges = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]
        assert _store(*edges).query("A") == ["B", "C", "D"]
        assert _store(*edges, legacy_traversal=True).query("A") == ["B", "C", "D", "D"]

    def test_cycle_terminates(self):
        store = _store(("A", "B"), ("B", "A"))
        assert store.query("A") == ["B", "A"]
        assert store.query("B") == ["A", "B"]

    def test_self_loop(self):
        assert _store(("A", "A")).query("A") == ["A"]

    def test_legacy_cycle_does_not_terminate(self):
        # Known non-terminating case, only reachable with legacy_traversal
        store = _store(("A", "B"), ("B", "A"), legacy_traversal=True)
        with pytest.raises(RecursionError):
            store.query("A")


class TestInverseQuery:
    def test_unknown_attribute(self):
        assert _store(("A", "B")).inverse_query("Z") == []

    def test_transitive(self):
        store = _store(("A", "B"), ("B", "C"))
        assert store.inverse_query("C") == ["B", "A"]
        assert store.inverse_query("c") == ["B", "A"]

    def test_depth_first_in_store_order(self):
        edges = [("A", "C"), ("X", "A"), ("B", "C")]
        assert _store(*edges).inverse_query("C") == ["A", "X", "B"]
        assert _store(*edges, legacy_traversal=True).inverse_query("C") == ["A", "X", "B"]

    def test_cycle_terminates(self):
        store = _store(("A", "B"), ("B", "A"))
        assert store.inverse_query("A") == ["B", "A"]

    def test_legacy_cycle_does_not_terminate(self):
        store = _store(("A", "B"), ("B", "A"), legacy_traversal=True)
        with pytest.raises(RecursionError):
            store.inverse_query("A")


class TestArticleIdentity:
    """With the lexicon identity, articles do not split nodes."""

    @pytest.fixture
    def store(self):
        store = FactStore(identity=default_lexicon().identity)
        store.store("Il gatto", "un felino")
        store.store("felino", "un animale")
        return store

    def test_subject_article_stripped(self, store):
        assert store.subjects() == ["GATTO", "FELINO"]

    def test_chain_through_articles(self, store):
        assert store.query("gatto") == ["un felino", "un animale"]

    def test_inverse_through_articles(self, store):
        assert store.inverse_query("animale") == ["FELINO", "GATTO"]
        assert store.inverse_query("un animale") == ["FELINO", "GATTO"]

    def test_duplicate_ignores_article(self, store):
        assert store.store("gatto", "felino") is False
        assert store.attributes("gatto") == ["un felino"]


class TestSerialization:
    def test_round_trip(self):
        store = _store(("gatto", "un Felino"), ("cane", "animale"), ("gatto", "città"))
        restored = FactStore.deserialize(store.serialize())
        assert restored.to_dict() == store.to_dict()
        assert restored.subjects() == ["GATTO", "CANE"]

    def test_round_trip_empty(self):
        assert FactStore.deserialize(FactStore().serialize()).to_dict() == {}

    def test_serialize_is_utf8_json(self):
        data = _store(("città", "bella")).serialize()
        assert "CITTÀ".encode("utf-8") in data
        assert json.loads(data.decode("utf-8")) == {"CITTÀ": ["bella"]}

    def test_serialize_is_deterministic(self):
        edges = [("a", "b"), ("c", "d")]
        assert _store(*edges).serialize() == _store(*edges).serialize()

    def test_reads_compact_escaped_json(self):
        store = FactStore.deserialize(b'{"GATTO":["un animale","\\u00e8"]}')
        assert store.attributes("gatto") == ["un animale", "è"]

    def test_reads_utf8_bom(self):
        store = FactStore.deserialize(b'\xef\xbb\xbf{"A":["B"]}')
        assert store.query("a") == ["B"]

    def test_accepts_str(self):
        assert FactStore.deserialize('{"A": ["B"]}').attributes("A") == ["B"]

    def test_keeps_options(self):
        store = FactStore.deserialize(b"{}", legacy_traversal=True)
        assert store.legacy_traversal is True

    @pytest.mark.parametrize("data", [
        b"not json",
        b"[1, 2]",
        b'"GATTO"',
        b'{"A": "B"}',
        b'{"A": [1]}',
        b'{"A": null}',
        b"\xff\xfe\x00",
    ])
    def test_malformed(self, data):
        with pytest.raises(MalformedStoreError):
            FactStore.deserialize(data)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            FactStore.deserialize(b"{")


class TestFiles:
    def test_save_and_load(self, tmp_path):
        path = tmp_path / "facts.json"
        _store(("A", "B"), ("B", "C")).save(path)
        assert FactStore.from_file(path).query("A") == ["B", "C"]

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "facts.json"
        _store(("A", "B")).save(str(path))
        assert path.exists()

    def test_save_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "facts.json"
        store = _store(("A", "B"))
        store.save(path)
        store.store("A", "C")
        store.save(path)
        assert list(tmp_path.iterdir()) == [path]
        assert FactStore.from_file(path).attributes("A") == ["B", "C"]

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FactStore.from_file(tmp_path / "missing.json")

    def test_load_malformed_file(self, tmp_path):
        path = tmp_path / "facts.json"
        path.write_text("garbage", encoding="utf-8")
        with pytest.raises(MalformedStoreError):
            FactStore.from_file(path)
