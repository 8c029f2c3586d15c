import json

import pytest

from saunafinder.catalogue import (
    CatalogueError,
    load_catalogue,
    load_catalogue_or_empty,
    normalize_record,
)
from saunafinder.http import HttpError

RAW_FINNISH = {
    "id": 5,
    "sijoitus": 3,
    "nimi": "Rauhaniemen kansankylpylä",
    "sijainti": {"kunta": "Tampere", "osoite": "Rauhaniementie 24"},
    "hinta": "8 €",
    "aukioloajat": [
        {"viikonpaivat": [1, 3], "alkaa": "15:00", "paattyy": "21:00", "selite": "Sekavuoro"}
    ],
    "ominaisuudet": ["avanto", "puusauna"],
    "pisteet": 41.5,
    "arvioinnit": {"loylyt": "20/25"},
    "kuvaus": "Klassikko",
    "huomioita": "",
}


class FakeHttp:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.urls = []

    def get_json(self, url, params=None, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.payload


def test_normalize_finnish_record():
    record = normalize_record(RAW_FINNISH)
    assert record["id"] == 5
    assert record["rank"] == 3
    assert record["name"] == "Rauhaniemen kansankylpylä"
    assert record["municipality"] == "Tampere"
    assert record["address"] == "Rauhaniementie 24"
    assert record["score"] == 41.5
    assert record["features"] == ["avanto", "puusauna"]
    assert record["opening_hours"] == [
        {"days": [1, 3], "start": "15:00", "end": "21:00", "note": "Sekavuoro"}
    ]
    assert "coordinates" not in record


def test_normalized_record_passes_through():
    record = normalize_record(RAW_FINNISH)
    assert normalize_record(record) == record


def test_missing_fields_propagate_as_empty():
    record = normalize_record({"id": 7})
    assert record["name"] is None
    assert record["rank"] is None
    assert record["opening_hours"] == []
    assert record["features"] == []


def test_load_catalogue_from_file(tmp_path):
    path = tmp_path / "saunas.json"
    path.write_text(json.dumps([RAW_FINNISH]), encoding="utf-8")
    records = load_catalogue(str(path))
    assert [r["id"] for r in records] == [5]


def test_load_catalogue_errors(tmp_path):
    with pytest.raises(CatalogueError):
        load_catalogue(str(tmp_path / "missing.json"))
    bad = tmp_path / "bad.json"
    bad.write_text("{}", encoding="utf-8")
    with pytest.raises(CatalogueError):
        load_catalogue(str(bad))
    assert load_catalogue_or_empty(str(bad)) == []


def test_load_catalogue_from_url():
    http = FakeHttp(payload=[RAW_FINNISH])
    records = load_catalogue("https://example.org/saunas.json", http=http)
    assert records[0]["name"] == "Rauhaniemen kansankylpylä"
    assert http.urls == ["https://example.org/saunas.json"]

    failing = FakeHttp(error=HttpError("HTTP 500"))
    assert load_catalogue_or_empty("https://example.org/saunas.json", http=failing) == []
