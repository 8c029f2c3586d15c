from saunafinder.http import HttpError
from saunafinder.weather import WeatherData, fetch_weather, parse_weather_response, weather_kind


class FakeHttp:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def get_json(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        if self.error:
            raise self.error
        return self.payload


def test_weather_kind_buckets():
    assert weather_kind(0) == "sun"
    assert weather_kind(3) == "cloud"
    assert weather_kind(61) == "rain"
    assert weather_kind(75) == "snow"
    assert weather_kind(95) == "cloud"


def test_parse_weather_response():
    parsed = parse_weather_response({"current_weather": {"temperature": -4.2, "weathercode": 71}})
    assert parsed == WeatherData(temperature=-4.2, weather_code=71)
    assert parse_weather_response({}) is None


def test_fetch_weather_passes_coordinates():
    http = FakeHttp(payload={"current_weather": {"temperature": 3.0, "weathercode": 2}})
    weather = fetch_weather(61.5, 23.76, http=http)
    assert weather.temperature == 3.0
    _, params = http.calls[0]
    assert params["latitude"] == 61.5
    assert params["longitude"] == 23.76


def test_fetch_weather_failure_returns_none():
    assert fetch_weather(61.5, 23.76, http=FakeHttp(error=HttpError("boom"))) is None
