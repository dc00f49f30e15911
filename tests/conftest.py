import fnmatch
from datetime import timedelta

import pytest
import redis
from sqlalchemy import event
from werkzeug.security import generate_password_hash

from climatrix import create_app
from climatrix.config import TestConfig
from climatrix.extensions import db
from climatrix.models import ClimateReading, Profile, User
from climatrix.services.cache import EXTENSION_KEY
from climatrix.utils import utcnow

PASSWORD = 'Password123'


class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the cache uses.

    Set ``down = True`` to make every command fail like an unreachable server.
    """

    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.down = False

    def _check(self):
        if self.down:
            raise redis.exceptions.ConnectionError('Error connecting to cache')

    def get(self, key):
        self._check()
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self._check()
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        self._check()
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def scan_iter(self, match=None):
        self._check()
        for key in list(self.store):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    def ping(self):
        self._check()
        return True


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    app.extensions[EXTENSION_KEY] = FakeRedis()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def fake_redis(app):
    return app.extensions[EXTENSION_KEY]


@pytest.fixture()
def queries(app):
    """SQL statements executed while the test runs."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    with app.app_context():
        engine = db.engine
    event.listen(engine, 'before_cursor_execute', record)
    yield statements
    event.remove(engine, 'before_cursor_execute', record)


def make_user(app, email, username, role='USER'):
    """Insert a user directly; returns its id."""
    with app.app_context():
        user = User(
            email=email,
            username=username,
            # Low iteration count keeps logins fast in tests
            password_hash=generate_password_hash(PASSWORD, method='pbkdf2:sha256:1000'),
            role=role,
            profile=Profile(interests=[]),
        )
        db.session.add(user)
        db.session.commit()
        return user.id


def login(client, email):
    r = client.post('/api/auth/login', json={'email': email, 'password': PASSWORD})
    assert r.status_code == 200, r.get_json()
    return r


@pytest.fixture()
def user_id(app):
    return make_user(app, 'user@example.com', 'regular')


@pytest.fixture()
def user_client(app, user_id):
    c = app.test_client()
    login(c, 'user@example.com')
    return c


@pytest.fixture()
def other_client(app):
    make_user(app, 'other@example.com', 'other')
    c = app.test_client()
    login(c, 'other@example.com')
    return c


@pytest.fixture()
def analyst_client(app):
    make_user(app, 'analyst@example.com', 'analyst', role='ANALYST')
    c = app.test_client()
    login(c, 'analyst@example.com')
    return c


@pytest.fixture()
def admin_client(app):
    make_user(app, 'admin@example.com', 'admin', role='ADMIN')
    c = app.test_client()
    login(c, 'admin@example.com')
    return c


@pytest.fixture()
def add_reading(app):
    """Insert a climate reading ``hours_ago`` hours old; returns its id."""
    def add(city='Mumbai', hours_ago=0, **metrics):
        with app.app_context():
            reading = ClimateReading(
                location=f'{city}, Maharashtra',
                city=city,
                country='India',
                latitude=19.076,
                longitude=72.8777,
                temperature=metrics.pop('temperature', 29.5),
                aqi=metrics.pop('aqi', 85),
                pm25=metrics.pop('pm25', 28.4),
                humidity=metrics.pop('humidity', 70.0),
                source='Test',
                reading_time=utcnow() - timedelta(hours=hours_ago),
                **metrics,
            )
            db.session.add(reading)
            db.session.commit()
            return reading.id
    return add
