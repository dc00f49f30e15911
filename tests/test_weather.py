from datetime import datetime, timezone

import pytest
import requests

from climatrix.services import weather as weather_service


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload


@pytest.fixture()
def upstream(monkeypatch):
    """Replace requests.get; set ``upstream.response`` or ``upstream.error``."""
    class Upstream:
        response = FakeResponse(200, {})
        error = None
        calls = []

    def fake_get(url, params=None, timeout=None):
        Upstream.calls.append({'url': url, 'params': params, 'timeout': timeout})
        if Upstream.error:
            raise Upstream.error
        return Upstream.response

    Upstream.calls = []
    monkeypatch.setattr(weather_service.requests, 'get', fake_get)
    return Upstream


def ts(day, hour):
    return int(datetime(2026, 10, day, hour, tzinfo=timezone.utc).timestamp())


CURRENT = {'name': 'Mumbai', 'main': {'temp': 29.3, 'humidity': 74}, 'weather': [{'main': 'Haze'}]}


def test_weather_by_city_is_cached(client, upstream):
    upstream.response = FakeResponse(200, CURRENT)

    r = client.get('/api/weather/city?city=Mumbai')
    assert r.status_code == 200
    assert r.get_json()['data'] == CURRENT
    assert r.headers['X-Cache'] == 'MISS'

    call = upstream.calls[0]
    assert call['url'] == 'https://weather.test/data/2.5/weather'
    assert call['params'] == {'q': 'Mumbai', 'units': 'metric', 'appid': 'test-weather-key'}
    assert call['timeout'] == 6

    r = client.get('/api/weather/city?city=MUMBAI')
    assert r.headers['X-Cache'] == 'HIT'
    assert len(upstream.calls) == 1


def test_weather_city_not_found(client, upstream):
    upstream.response = FakeResponse(404, {'cod': '404', 'message': 'city not found'})
    r = client.get('/api/weather/city?city=Atlantis')
    assert r.status_code == 404
    assert r.get_json()['message'] == 'City not found'


def test_weather_timeout_and_upstream_failure(client, upstream):
    upstream.error = requests.exceptions.Timeout('read timed out')
    r = client.get('/api/weather/city?city=Pune')
    assert r.status_code == 500
    assert r.get_json()['message'] == 'Failed to fetch weather data'

    upstream.error = None
    upstream.response = FakeResponse(502, {})
    r = client.get('/api/weather/city?city=Pune')
    assert r.status_code == 500

    upstream.response = FakeResponse(200, None)
    r = client.get('/api/weather/city?city=Pune')
    assert r.status_code == 500


def test_weather_api_key_missing(app, client, upstream):
    app.config['WEATHER_API_KEY'] = None
    r = client.get('/api/weather/city?city=Pune')
    assert r.status_code == 500
    assert r.get_json()['message'] == 'Weather API key not configured'
    assert upstream.calls == []


def test_weather_requires_city(client, upstream):
    r = client.get('/api/weather/city')
    assert r.status_code == 400
    assert r.get_json()['errors'][0]['field'] == 'city'


def test_weather_by_coords(client, upstream):
    upstream.response = FakeResponse(200, CURRENT)
    r = client.get('/api/weather/coords?lat=19.07&lon=72.87')
    assert r.status_code == 200
    assert upstream.calls[0]['params']['lat'] == 19.07

    assert client.get('/api/weather/coords?lat=100&lon=0').status_code == 400


def test_air_quality(client, upstream):
    upstream.response = FakeResponse(200, {'list': [{'main': {'aqi': 3}}]})
    r = client.get('/api/weather/air-quality?lat=28.61&lon=77.2')
    assert r.status_code == 200
    assert r.get_json()['data']['list'][0]['main']['aqi'] == 3
    assert upstream.calls[0]['url'].endswith('/air_pollution')


def test_forecast_passthrough(client, upstream):
    upstream.response = FakeResponse(200, {'list': [], 'city': {'name': 'Pune'}})
    r = client.get('/api/weather/forecast?city=Pune')
    assert r.status_code == 200
    assert upstream.calls[0]['url'].endswith('/forecast')


def test_trend_groups_by_utc_day(client, upstream, fake_redis):
    upstream.response = FakeResponse(200, {
        'city': {'name': 'Mumbai', 'country': 'IN'},
        'list': [
            {'dt': ts(20, 3), 'main': {'temp': 30.0}},
            {'dt': ts(19, 21), 'main': {'temp': 27.0}},
            {'dt': ts(19, 9), 'main': {'temp': 31.0}},
            {'dt': ts(20, 15), 'main': {'temp': 33.25}},
            {'dt': ts(19, 15), 'main': {'temp': 32.0}},
        ],
    })

    r = client.get('/api/weather/trend?city=mumbai')
    assert r.status_code == 200
    assert r.get_json()['data'] == {
        'city': 'Mumbai',
        'country': 'IN',
        'trend': [
            {'date': '2026-10-19', 'avgTemp': 30.0, 'maxTemp': 32.0, 'minTemp': 27.0},
            {'date': '2026-10-20', 'avgTemp': 31.6, 'maxTemp': 33.2, 'minTemp': 30.0},
        ],
    }
    assert 'weather:trend:mumbai' in fake_redis.store


def test_build_trend_caps_days():
    forecast = {'list': [{'dt': ts(day, 12), 'main': {'temp': day}} for day in range(1, 11)]}
    result = weather_service.build_trend(forecast, 'Pune')
    assert result['city'] == 'Pune'
    assert result['country'] is None
    assert len(result['trend']) == weather_service.TREND_DAYS
    assert result['trend'][0]['date'] == '2026-10-01'
