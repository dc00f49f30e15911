def test_latest_missing_city_then_cached_hit(add_reading, client, queries):
    r = client.get('/api/climate/latest?city=Mumbai')
    assert r.status_code == 404
    assert 'Mumbai' in r.get_json()['message']

    reading_id = add_reading()

    r = client.get('/api/climate/latest?city=Mumbai')
    assert r.status_code == 200
    assert r.headers['X-Cache'] == 'MISS'
    data = r.get_json()['data']
    assert data['id'] == reading_id
    assert data['temperature'] == 29.5
    assert data['aqi'] == 85
    assert data['pm25'] == 28.4

    # second call is served from the cache without touching the database
    del queries[:]
    r2 = client.get('/api/climate/latest?city=mumbai')
    assert r2.status_code == 200
    assert r2.headers['X-Cache'] == 'HIT'
    assert r2.data == r.data
    assert queries == []


def test_latest_returns_newest_reading(add_reading, client):
    add_reading(hours_ago=3, temperature=20.0)
    newest = add_reading(hours_ago=1, temperature=25.0)
    add_reading(city='Pune', hours_ago=0, temperature=31.0)

    r = client.get('/api/climate/latest?city=MUMBAI')
    assert r.get_json()['data']['id'] == newest


def test_latest_requires_city(client):
    r = client.get('/api/climate/latest')
    assert r.status_code == 400
    assert r.get_json()['errors'][0]['field'] == 'city'


def test_history_window_and_order(app, add_reading, client, fake_redis):
    add_reading(hours_ago=30)
    second = add_reading(hours_ago=2)
    first = add_reading(hours_ago=10)

    r = client.get('/api/climate/history?city=Mumbai&hours=24')
    assert r.status_code == 200
    data = r.get_json()['data']
    assert data['city'] == 'Mumbai'
    assert data['hours'] == 24
    assert data['count'] == 2
    assert [row['id'] for row in data['readings']] == [first, second]
    assert set(data['readings'][0]) == {
        'id', 'location', 'temperature', 'feelsLike', 'aqi', 'pm25', 'humidity',
        'uvIndex', 'rainfall', 'windSpeed', 'readingTime',
    }

    # stored under the medium TTL bucket
    assert fake_redis.ttls['climate:history:mumbai:24'] == app.config['CACHE_TTL_MEDIUM']


def test_history_hours_bounds(client):
    assert client.get('/api/climate/history?city=Mumbai&hours=0').status_code == 400
    assert client.get('/api/climate/history?city=Mumbai&hours=169').status_code == 400


def test_history_not_found(client):
    r = client.get('/api/climate/history?city=Atlantis')
    assert r.status_code == 404
    assert r.get_json()['message'] == 'No historical data found for Atlantis'


READING = {
    'location': 'Bandra, Mumbai',
    'city': 'Mumbai',
    'country': 'India',
    'latitude': 19.05,
    'longitude': 72.84,
    'temperature': 31.2,
    'pm25': 35.4,
    'source': 'Sensor-7',
}


def test_create_reading_requires_analyst_or_admin(client, user_client):
    assert client.post('/api/climate/readings', json=READING).status_code == 401
    r = user_client.post('/api/climate/readings', json=READING)
    assert r.status_code == 403
    assert r.get_json()['message'] == 'Forbidden: Insufficient permissions'


def test_create_reading_derives_aqi_and_invalidates_cache(add_reading, analyst_client, fake_redis):
    add_reading()
    assert analyst_client.get('/api/climate/latest?city=Mumbai').headers['X-Cache'] == 'MISS'
    assert 'climate:latest:mumbai' in fake_redis.store

    r = analyst_client.post('/api/climate/readings', json=READING)
    assert r.status_code == 201
    assert r.get_json()['data']['aqi'] == 100
    assert 'climate:latest:mumbai' not in fake_redis.store

    r = analyst_client.get('/api/climate/latest?city=Mumbai')
    assert r.headers['X-Cache'] == 'MISS'
    assert r.get_json()['data']['source'] == 'Sensor-7'


def test_create_reading_needs_aqi_or_pm25(admin_client):
    payload = dict(READING)
    del payload['pm25']
    r = admin_client.post('/api/climate/readings', json=payload)
    assert r.status_code == 400
    assert r.get_json()['errors'] == [{'field': 'aqi', 'message': 'Either aqi or pm25 is required'}]


def test_create_reading_rejects_out_of_range_coordinates(admin_client):
    r = admin_client.post('/api/climate/readings', json=dict(READING, latitude=91))
    assert r.status_code == 400
    assert r.get_json()['errors'][0]['field'] == 'latitude'
