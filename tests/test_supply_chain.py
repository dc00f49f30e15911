import re

from climatrix.extensions import db
from climatrix.models import SupplyChainEvent, SupplyChainItem

ITEM = {
    'productName': 'Organic Cotton T-Shirts',
    'category': 'Textiles',
    'origin': 'Bangalore, Karnataka',
    'currentLocation': 'Bangalore, Karnataka',
    'destination': 'New Delhi, Delhi',
    'carbonFootprint': 45.5,
}


def create_item(client, **overrides):
    r = client.post('/api/supply-chain', json=dict(ITEM, **overrides))
    assert r.status_code == 201, r.get_json()
    return r.get_json()['data']


def test_supply_chain_requires_login(client):
    assert client.get('/api/supply-chain').status_code == 401
    assert client.post('/api/supply-chain', json=ITEM).status_code == 401


def test_create_item_defaults(user_client):
    item = create_item(user_client)
    assert re.fullmatch(r'PROD-\d+-[A-Z0-9]{9}', item['productCode'])
    assert item['status'] == 'PENDING'
    assert item['eventCount'] == 1
    assert item['events'][0]['eventType'] == 'created'
    assert item['events'][0]['location'] == 'Bangalore, Karnataka'
    assert item['alerts'] == []


def test_duplicate_product_code_conflicts(app, user_client, other_client):
    create_item(user_client, productCode='PROD-001')

    r = other_client.post('/api/supply-chain', json=dict(ITEM, productCode='PROD-001'))
    assert r.status_code == 409
    with app.app_context():
        assert SupplyChainItem.query.count() == 1


def test_list_own_items_newest_first(user_client, other_client):
    first = create_item(user_client)
    second = create_item(user_client)
    create_item(other_client)

    r = user_client.get('/api/supply-chain')
    assert r.status_code == 200
    assert [i['id'] for i in r.get_json()['data']['items']] == [second['id'], first['id']]


def test_update_location_and_status_appends_events(user_client):
    item = create_item(user_client)

    r = user_client.patch(f"/api/supply-chain/{item['id']}", json={
        'currentLocation': 'Mumbai, Maharashtra',
        'status': 'IN_TRANSIT',
    })
    assert r.status_code == 200
    data = r.get_json()['data']
    assert data['currentLocation'] == 'Mumbai, Maharashtra'
    assert data['status'] == 'IN_TRANSIT'
    assert data['eventCount'] == 3
    assert {e['eventType'] for e in data['events']} == {'created', 'location_update', 'status_change'}


def test_delay_raises_alert_and_arrival_resolves_it(user_client):
    item = create_item(user_client)

    r = user_client.patch(f"/api/supply-chain/{item['id']}", json={'status': 'DELAYED'})
    data = r.get_json()['data']
    assert [a['alertType'] for a in data['alerts']] == ['DELAYED']
    assert data['alertCount'] == 1

    r = user_client.patch(f"/api/supply-chain/{item['id']}", json={'status': 'ARRIVED'})
    data = r.get_json()['data']
    assert data['alerts'] == []
    assert data['alertCount'] == 1
    assert data['actualArrival'] is not None


def test_explicit_arrival_time_is_kept(user_client):
    item = create_item(user_client)
    r = user_client.patch(f"/api/supply-chain/{item['id']}", json={
        'status': 'DELIVERED',
        'actualArrival': '2026-03-01T10:00:00',
    })
    assert r.get_json()['data']['actualArrival'] == '2026-03-01T10:00:00'


def test_update_rejects_unknown_status(user_client):
    item = create_item(user_client)
    r = user_client.patch(f"/api/supply-chain/{item['id']}", json={'status': 'LOST'})
    assert r.status_code == 400


def test_add_event_owner_only(app, user_client, other_client):
    item = create_item(user_client)
    event = {'eventType': 'checkpoint', 'location': 'Pune', 'latitude': 18.52, 'longitude': 73.85}

    assert other_client.post(f"/api/supply-chain/{item['id']}/events", json=event).status_code == 404
    assert other_client.patch(f"/api/supply-chain/{item['id']}", json={'status': 'DELAYED'}).status_code == 404

    r = user_client.post(f"/api/supply-chain/{item['id']}/events", json=event)
    assert r.status_code == 201
    assert r.get_json()['data']['location'] == 'Pune'

    with app.app_context():
        assert SupplyChainEvent.query.filter_by(item_id=item['id']).count() == 2
        assert db.session.get(SupplyChainItem, item['id']).status == 'PENDING'


def test_list_shows_five_newest_events(user_client):
    item = create_item(user_client)
    for i in range(6):
        user_client.post(f"/api/supply-chain/{item['id']}/events", json={
            'eventType': 'checkpoint',
            'location': f'Stop {i}',
            'timestamp': f'2030-01-0{i + 1}T00:00:00',
        })

    listed = user_client.get('/api/supply-chain').get_json()['data']['items'][0]
    assert listed['eventCount'] == 7
    assert [e['location'] for e in listed['events']] == ['Stop 5', 'Stop 4', 'Stop 3', 'Stop 2', 'Stop 1']
