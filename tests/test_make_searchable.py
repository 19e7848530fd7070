from firesearch.domain.search_schema import GramResult, SearchableType, SearchType
from firesearch.models.search import Searchable
from firesearch.services import make_searchable as ms


def _track(monkeypatch):
    calls = {"grams": [], "prefixes": []}
    real_grams, real_prefixes = ms.generate_grams, ms.generate_prefixes

    def fake_grams(n, text):
        calls["grams"].append((n, text))
        return real_grams(n, text)

    def fake_prefixes(text):
        calls["prefixes"].append(text)
        return real_prefixes(text)

    monkeypatch.setattr(ms, "generate_grams", fake_grams)
    monkeypatch.setattr(ms, "generate_prefixes", fake_prefixes)
    return calls


def test_both_search_types():
    result = ms.build_searchable_fields("title", "test", {"autoComplete", "fullTextSearch"})
    assert result == {
        "fts_tri_title": ["tes", "est"],
        "ac_pre_title": ["t", "te", "tes", "test"],
    }


def test_only_auto_complete(monkeypatch):
    calls = _track(monkeypatch)
    result = ms.build_searchable_fields("productName", "laptop", ["autoComplete"])
    assert result == {"ac_pre_productName": ["l", "la", "lap", "lapt", "lapto", "laptop"]}
    assert calls["prefixes"] == ["laptop"]
    assert calls["grams"] == []


def test_only_full_text_uses_trigrams(monkeypatch):
    calls = _track(monkeypatch)
    result = ms.build_searchable_fields("description", "a great", ["fullTextSearch"])
    assert result == {"fts_tri_description": ["a g", " gr", "gre", "rea", "eat"]}
    assert calls["grams"] == [(3, "a great")]
    assert calls["prefixes"] == []


def test_enum_members_accepted():
    result = ms.build_searchable_fields("k", "abc", [SearchType.FULL_TEXT_SEARCH, SearchType.AUTO_COMPLETE])
    assert set(result) == {"fts_tri_k", "ac_pre_k"}


def test_empty_search_types(monkeypatch):
    calls = _track(monkeypatch)
    assert ms.build_searchable_fields("anyKey", "anyValue", []) == {}
    assert calls == {"grams": [], "prefixes": []}


def test_unknown_search_types_ignored(monkeypatch):
    calls = _track(monkeypatch)
    assert ms.build_searchable_fields("anyKey", "anyValue", ["someOtherType"]) == {}
    assert calls == {"grams": [], "prefixes": []}
    assert ms.build_searchable_fields("k", "abc", ["someOtherType", "autoComplete"]) == {"ac_pre_k": ["a", "ab", "abc"]}


def test_empty_value():
    result = ms.build_searchable_fields("username", "", ["autoComplete", "fullTextSearch"])
    assert result == {"ac_pre_username": [], "fts_tri_username": []}


def test_field_name_follows_gram_type(monkeypatch):
    monkeypatch.setattr(ms, "generate_grams", lambda n, text: GramResult(SearchableType.TRI, ["x"]))
    assert ms.build_searchable_fields("name", "whatever", ["fullTextSearch"]) == {"fts_tri_name": ["x"]}


def test_many_merges_per_key():
    fields = ms.build_searchable_fields_many([
        Searchable(key="title", value="Red Bag", searchType=["autoComplete"]),
        Searchable(key="place", value="gangnam", searchType=["fullTextSearch"]),
    ])
    assert fields["ac_pre_title"] == ["r", "re", "red", "b", "ba", "bag"]
    assert fields["fts_tri_place"] == ["gan", "ang", "ngn", "gna", "nam"]


def test_ensure_searchable_updates_doc_in_place():
    doc = {"title": "Cat", "other": 1}
    out = ms.ensure_searchable(doc, "title", ["fullTextSearch", "autoComplete"])
    assert out is doc
    assert doc["fts_tri_title"] == ["Cat"]
    assert doc["ac_pre_title"] == ["c", "ca", "cat"]
    assert doc["other"] == 1


def test_ensure_searchable_custom_key_and_non_string_source():
    doc = {"title": "Cat"}
    ms.ensure_searchable(doc, "title", ["autoComplete"], key="name")
    assert "ac_pre_name" in doc and "ac_pre_title" not in doc

    doc = {"title": None}
    assert ms.ensure_searchable(doc, "title", ["autoComplete"]) == {"title": None}
    assert ms.ensure_searchable({}, "title", ["autoComplete"]) == {}


def test_searchable_model_to_fields():
    s = Searchable(key="title", value="test", searchType=["fullTextSearch", "autoComplete"])
    assert s.to_fields() == {"fts_tri_title": ["tes", "est"], "ac_pre_title": ["t", "te", "tes", "test"]}
