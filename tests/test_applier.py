# tests/test_applier.py
"""
变更应用测试，包括编辑缓冲区的完整往返。
"""

import json

import pytest

from i18nedt.core.applier import apply_changes
from i18nedt.core.codec import parse, render, serialize
from i18nedt.core.errors import InvalidJSONError
from i18nedt.core.models import ChangeSet, Document, TypedValue


def _doc(data, locale="en", namespace="", path=None):
    return Document(path=path or f"{namespace or 'root'}/{locale}.json", data=data, locale=locale, namespace=namespace)


def test_update_marks_document_dirty():
    doc = _doc('{"hello":"Hello"}')
    report = apply_changes([doc], ChangeSet(updates={"hello": {"en": TypedValue.string("Hi")}}))
    assert doc.dirty
    assert json.loads(doc.data) == {"hello": "Hi"}
    assert report.updated == [(doc.path, "hello", "en")]
    assert report.changed


def test_identical_value_is_not_written():
    doc = _doc('{"hello": "Hello"}')
    report = apply_changes([doc], ChangeSet(updates={"hello": {"en": TypedValue.string("Hello")}}))
    assert not doc.dirty
    assert doc.data == '{"hello": "Hello"}'
    assert not report.changed


def test_equivalent_json_is_not_written():
    doc = _doc('{"list":[1,2]}')
    apply_changes([doc], ChangeSet(updates={"list": {"en": TypedValue.json("[\n  1,\n  2\n]")}}))
    assert not doc.dirty


def test_writing_twice_is_noop_the_second_time():
    doc = _doc('{"hello":"Hello"}')
    change_set = ChangeSet(updates={"hello": {"en": TypedValue.string("Hi")}})
    apply_changes([doc], change_set)
    doc.dirty = False
    report = apply_changes([doc], change_set)
    assert not doc.dirty
    assert report.updated == []


def test_absent_locale_is_left_untouched():
    en = _doc('{"hello":"Hello"}', locale="en")
    zh = _doc('{"hello":"你好"}', locale="zh")
    apply_changes([en, zh], ChangeSet(updates={"hello": {"en": TypedValue.string("Hi")}}))
    assert en.dirty
    assert not zh.dirty
    assert zh.data == '{"hello":"你好"}'


def test_empty_string_for_missing_key_is_not_written():
    doc = _doc('{"other":"x"}')
    apply_changes([doc], ChangeSet(updates={"hello": {"en": TypedValue.string("")}}))
    assert not doc.dirty


def test_empty_string_clears_existing_key():
    doc = _doc('{"hello":"Hello"}')
    apply_changes([doc], ChangeSet(updates={"hello": {"en": TypedValue.string("")}}))
    assert json.loads(doc.data) == {"hello": ""}


def test_json_value_replaces_string():
    doc = _doc('{"menu":"flat"}')
    apply_changes([doc], ChangeSet(updates={"menu": {"en": TypedValue.json('{"open": "Open"}')}}))
    assert json.loads(doc.data) == {"menu": {"open": "Open"}}


def test_deletion_removes_exactly_target_path():
    doc = _doc('{"a":1,"b":2}')
    report = apply_changes([doc], ChangeSet(deletions=["a"]))
    assert doc.data == '{"b":2}'
    assert doc.dirty
    assert report.deleted == [(doc.path, "a")]


def test_deletion_is_scoped_to_namespace():
    common = _doc('{"a":1,"b":2}', namespace="common")
    auth = _doc('{"a":1}', namespace="auth")
    root = _doc('{"a":1}')
    apply_changes([common, auth, root], ChangeSet(deletions=["common:a"]))
    assert common.data == '{"b":2}'
    assert not auth.dirty
    assert not root.dirty


def test_deletion_of_missing_key_is_noop():
    doc = _doc('{"a":1}')
    apply_changes([doc], ChangeSet(deletions=["missing"]))
    assert not doc.dirty


def test_deletions_run_before_updates():
    doc = _doc('{"hello":{"deep":1},"x":1}')
    apply_changes([doc], ChangeSet(
        updates={"hello": {"en": TypedValue.string("fresh")}},
        deletions=["hello"],
    ))
    assert doc.data == '{"x":1,"hello":"fresh"}'


def test_update_matches_namespace_and_locale(namespaced_documents):
    apply_changes(namespaced_documents, ChangeSet(updates={
        "auth:login": {"zh": TypedValue.string("登入")},
    }))
    dirty = [doc.path for doc in namespaced_documents if doc.dirty]
    assert dirty == ["locales/zh/auth.json"]


def test_invalid_document_is_skipped():
    broken = _doc("not json", locale="en")
    good = _doc('{"hello":"Hello"}', locale="zh")
    report = apply_changes([broken, good], ChangeSet(updates={
        "hello": {"en": TypedValue.string("x"), "zh": TypedValue.string("y")},
    }))
    assert not broken.dirty
    assert good.dirty
    assert [(path, key) for path, key, _ in report.skipped] == [(broken.path, "hello")]


def test_invalid_json_value_is_fatal():
    doc = _doc('{"menu":{}}')
    with pytest.raises(InvalidJSONError) as exc_info:
        apply_changes([doc], ChangeSet(updates={"menu": {"en": TypedValue.json("{invalid}")}}))
    assert exc_info.value.key == "menu"
    assert exc_info.value.locale == "en"
    assert not doc.dirty


# --- 往返 ---

@pytest.mark.parametrize("keys", [
    ["hello"],
    ["hello", "login", "missing.key"],
    ["common:hello", "auth:login", "auth:nope"],
])
def test_round_trip_without_edits_leaves_documents_clean(namespaced_documents, keys):
    buffer = serialize(namespaced_documents, keys)
    report = apply_changes(namespaced_documents, parse(render(buffer)))
    assert not any(doc.dirty for doc in namespaced_documents)
    assert not report.changed


def test_round_trip_preserves_json_values():
    documents = [
        _doc('{"menu":{"items":["a","b"],"count":2,"flag":true}}', locale="en"),
        _doc('{"menu":{"items":[]}}', locale="zh"),
    ]
    change_set = parse(render(serialize(documents, ["menu"])))
    value = change_set.updates["menu"]["en"]
    assert value.is_json
    assert json.loads(value.raw) == {"items": ["a", "b"], "count": 2, "flag": True}

    apply_changes(documents, change_set)
    assert not any(doc.dirty for doc in documents)


@pytest.mark.parametrize("text", [
    "+ Add item",
    "* required",
    "# of items",
    "// not a comment",
    "#- not a deletion",
    "   ",
    "a\n\nb",
    "trailing\n",
    "\nleading",
    "tab\r\nreturn",
])
def test_round_trip_keeps_strings_that_look_like_markup(text):
    doc = _doc(json.dumps({"k": text, "other": "plain"}, ensure_ascii=False))
    zh = _doc('{"k":"普通"}', locale="zh")
    original = doc.data
    apply_changes([doc, zh], parse(render(serialize([doc, zh], ["k"]))))
    assert not doc.dirty
    assert not zh.dirty
    assert doc.data == original


def test_edited_json_literal_string_is_stored_as_string():
    doc = _doc('{"k":"+ Add item"}')
    text = render(serialize([doc], ["k"]), tips=False)
    assert text == '# k\n+ en\n"+ Add item"\n\n'
    apply_changes([doc], parse(text.replace('"+ Add item"', '"+ Add new item"')))
    assert json.loads(doc.data) == {"k": "+ Add new item"}


def test_round_trip_keeps_scalar_types():
    doc = _doc('{"count":3,"enabled":false}')
    apply_changes([doc], parse(render(serialize([doc], ["count", "enabled"]))))
    assert not doc.dirty


def test_end_to_end_namespaces():
    common = Document(path="en/common.json", data='{"hello":"world"}', locale="en", namespace="common")
    auth = Document(path="en/auth.json", data='{"login":"sign in"}', locale="en", namespace="auth")
    documents = [common, auth]

    text = render(serialize(documents, ["hello", "auth:login"]), tips=False)
    assert "# common:hello\n* en\nworld\n" in text
    assert "# auth:login\n* en\nsign in\n" in text

    edited = "# common:hello\n* en\nworld updated\n\n#- auth:login\n"
    apply_changes(documents, parse(edited))

    assert json.loads(common.data) == {"hello": "world updated"}
    assert json.loads(auth.data) == {}
    assert common.dirty and auth.dirty


def test_invalid_json_in_buffer_modifies_nothing(namespaced_documents):
    text = render(serialize(namespaced_documents, ["hello"]), tips=False)
    edited = text + "# common:menu\n+ en\n{invalid}\n"
    with pytest.raises(InvalidJSONError):
        apply_changes(namespaced_documents, parse(edited))
    assert not any(doc.dirty for doc in namespaced_documents)
