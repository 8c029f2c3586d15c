import random
from datetime import date

from saunafinder import config
from saunafinder.http import HttpError
from saunafinder.water import (
    ID_NAME_MAPPING,
    estimated_water_temperatures,
    fetch_water_temperatures,
    parse_water_temperatures,
    seasonal_water_temp,
)

HTML = """
<table>
<tr><td>Rauhaniemen uimapaikka</td><td>Vesi</td><td>4,3</td></tr>
<tr><td>Kaupinoja</td><td>3.9</td></tr>
<tr><td>Pereensaari</td><td>ei mittausta</td></tr>
</table>
"""


class FakeHttp:
    def __init__(self, json_payload=None, text=None, fail=False):
        self.json_payload = json_payload
        self.text = text
        self.fail = fail
        self.urls = []

    def get_json(self, url, params=None, timeout=None):
        self.urls.append(url)
        if self.fail:
            raise HttpError("blocked")
        return self.json_payload

    def get_text(self, url, params=None, timeout=None):
        self.urls.append(url)
        if self.fail:
            raise HttpError("blocked")
        return self.text


def test_parse_water_temperatures():
    temps = parse_water_temperatures(HTML)
    assert temps[5] == 4.3
    assert temps[7] == 3.9
    assert 9 not in temps


def test_seasonal_water_temp():
    assert seasonal_water_temp(date(2026, 7, 1)) == 19.5
    assert seasonal_water_temp(date(2026, 9, 1)) == 14.0
    assert seasonal_water_temp(date(2026, 10, 19)) == 8.0
    assert seasonal_water_temp(date(2026, 1, 5)) == 2.5


def test_estimates_cover_mapped_ids_within_variation():
    temps = estimated_water_temperatures(rng=random.Random(3), today=date(2026, 7, 1))
    assert set(temps) == set(ID_NAME_MAPPING)
    assert all(18.2 <= t <= 20.8 for t in temps.values())


def test_fetch_uses_first_proxy_contents(monkeypatch):
    monkeypatch.setattr(
        config,
        "WATER_TEMPS_PROXY_URLS",
        ["https://api.allorigins.win/get?url={url}", "https://api.codetabs.com/v1/proxy?quest={url}"],
    )
    http = FakeHttp(json_payload={"contents": HTML})
    temps = fetch_water_temperatures(http=http)
    assert temps[5] == 4.3
    assert len(http.urls) == 1
    assert "tampere.sometec.fi" in http.urls[0]


def test_fetch_falls_back_to_estimates(monkeypatch):
    monkeypatch.setattr(config, "WATER_TEMPS_PROXY_URLS", ["https://proxy.example/{url}"])
    temps = fetch_water_temperatures(
        http=FakeHttp(fail=True), rng=random.Random(1), today=date(2026, 1, 10)
    )
    assert set(temps) == set(ID_NAME_MAPPING)
    assert all(1.2 <= t <= 3.8 for t in temps.values())
