import json

from saunafinder.overrides import (
    COORDINATE_ENRICHMENTS,
    apply_overrides,
    effective_records,
    merge_edit,
    toggle_favorite,
)


def _base():
    return [
        {"id": 5, "name": "Rauhaniemi", "price": "6 e", "notes": ""},
        {"id": 999, "name": "Unmapped", "price": "10 e", "notes": ""},
    ]


def test_empty_override_map_returns_equal_record():
    base = _base()[1]
    assert apply_overrides(base, {}) == base
    assert apply_overrides(base, None) == base


def test_override_replaces_named_fields_only():
    merged = apply_overrides(_base()[0], {5: {"price": "8 e"}})
    assert merged["price"] == "8 e"
    assert merged["name"] == "Rauhaniemi"


def test_merge_is_idempotent_and_does_not_mutate_base():
    base = _base()[0]
    overrides = {"5": {"name": "Rauhaniemen kansankylpylä"}}
    once = apply_overrides(base, overrides)
    twice = apply_overrides(once, overrides)
    assert once == twice
    assert base["name"] == "Rauhaniemi"


def test_string_and_int_keys_both_match():
    base = _base()[0]
    assert apply_overrides(base, {"5": {"notes": "x"}})["notes"] == "x"
    assert apply_overrides(base, {5: {"notes": "y"}})["notes"] == "y"


def test_enrichment_and_user_edits_compose():
    records = effective_records(_base(), {"5": {"price": "7 e"}})
    rauhaniemi = records[0]
    assert rauhaniemi["coordinates"] == COORDINATE_ENRICHMENTS[5]["coordinates"]
    assert rauhaniemi["price"] == "7 e"
    assert "coordinates" not in records[1]


def test_user_edit_of_coordinates_wins_over_enrichment():
    records = effective_records(_base(), {"5": {"coordinates": {"lat": 1.0, "lon": 2.0}}})
    assert records[0]["coordinates"] == {"lat": 1.0, "lon": 2.0}


def test_revert_by_overwriting_override_map_restores_fields():
    base = _base()
    edits = merge_edit({}, 5, {"name": "Edited"})
    assert effective_records(base, edits)[0]["name"] == "Edited"
    assert effective_records(base, {})[0]["name"] == "Rauhaniemi"


def test_merge_edit_accumulates_and_survives_json():
    edits = merge_edit({}, 5, {"name": "A"})
    edits = merge_edit(edits, 5, {"price": "9 e"})
    edits = merge_edit(edits, 5, {"name": "B"})
    assert edits == {"5": {"name": "B", "price": "9 e"}}
    assert json.loads(json.dumps(edits)) == edits


def test_toggle_favorite():
    favs = toggle_favorite([], 3)
    assert favs == [3]
    favs = toggle_favorite(favs, 7)
    assert favs == [3, 7]
    assert toggle_favorite(favs, 3) == [7]
