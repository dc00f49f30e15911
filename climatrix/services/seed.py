"""
Seed Data Service

Generates demo users, realistic climate readings and community content.
"""

import logging
import random
from datetime import timedelta

from climatrix.extensions import db
from climatrix.models import (
    ClimateReading, EnvironmentalAlert, EnvironmentalPledge, Group, GroupMember,
    Post, Comment, Profile, SupplyChainEvent, SupplyChainItem, User,
)
from climatrix.services.aqi import calculate_aqi
from climatrix.services.auth import hash_password
from climatrix.utils import utcnow

logger = logging.getLogger(__name__)

DEMO_PASSWORD = 'Password123'

# City-specific characteristics for simulated readings
CITY_CHARACTERISTICS = {
    'New Delhi': {'state': 'Delhi', 'lat': 28.6139, 'lon': 77.2090, 'pm25_base': 90, 'temp_base': 30},
    'Mumbai': {'state': 'Maharashtra', 'lat': 19.0760, 'lon': 72.8777, 'pm25_base': 45, 'temp_base': 29},
    'Bangalore': {'state': 'Karnataka', 'lat': 12.9716, 'lon': 77.5946, 'pm25_base': 30, 'temp_base': 24},
}


def simulate_climate_readings(city, hours=24, source='Simulation'):
    """Build one reading per hour for ``city`` over the last ``hours`` hours.

    Readings are returned unsaved so callers decide when to commit.
    """
    characteristics = CITY_CHARACTERISTICS[city]
    now = utcnow()
    readings = []

    for i in range(hours):
        reading_time = now - timedelta(hours=hours - i - 1)

        # Simulate time-of-day effect
        hour = reading_time.hour
        time_factor = 1.0
        if 7 <= hour <= 9 or 17 <= hour <= 19:  # Rush hours
            time_factor = 1.3
        elif 22 <= hour or hour <= 5:  # Night time
            time_factor = 0.7

        pm25 = round(max(5, characteristics['pm25_base'] * time_factor + random.uniform(-10, 15)), 2)
        pm10 = max(10, pm25 * random.uniform(1.5, 2.0) + random.uniform(-5, 10))
        temperature = characteristics['temp_base'] + random.uniform(-5, 5)

        readings.append(ClimateReading(
            location=f"{city}, {characteristics['state']}",
            city=city,
            state=characteristics['state'],
            country='India',
            latitude=characteristics['lat'],
            longitude=characteristics['lon'],
            temperature=round(temperature, 1),
            feels_like=round(temperature + random.uniform(0, 3), 1),
            temp_min=round(temperature - random.uniform(1, 4), 1),
            temp_max=round(temperature + random.uniform(1, 4), 1),
            aqi=calculate_aqi(pm25),
            pm25=pm25,
            pm10=round(pm10, 2),
            co=round(random.uniform(0.5, 2.5), 2),
            no2=round(random.uniform(20, 60), 1),
            so2=round(random.uniform(10, 40), 1),
            o3=round(random.uniform(40, 120), 1),
            humidity=round(random.uniform(50, 90), 1),
            pressure=round(random.uniform(1010, 1030), 1),
            visibility=round(random.uniform(5000, 10000)),
            wind_speed=round(random.uniform(2, 10), 1),
            wind_direction=round(random.uniform(0, 360)),
            rainfall=round(random.uniform(0, 10), 1),
            cloud_cover=random.randint(0, 100),
            uv_index=round(random.uniform(2, 10), 1),
            source=source,
            reading_time=reading_time,
        ))

    return readings


def _create_user(email, username, role, first_name, last_name, city, bio, interests):
    characteristics = CITY_CHARACTERISTICS[city]
    user = User(
        email=email,
        username=username,
        password_hash=hash_password(DEMO_PASSWORD),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_verified=True,
        city=city,
        state=characteristics['state'],
        country='India',
        latitude=characteristics['lat'],
        longitude=characteristics['lon'],
        profile=Profile(bio=bio, interests=interests),
    )
    db.session.add(user)
    return user


def seed_database(hours=24):
    """Replace all data with a demo data set. Returns row counts."""
    db.drop_all()
    db.create_all()

    admin = _create_user('admin@climatrix.com', 'admin', 'ADMIN', 'Admin', 'User', 'New Delhi',
                         'Climate data administrator and analyst',
                         ['climate-science', 'data-analysis', 'sustainability'])
    john = _create_user('john.doe@example.com', 'johndoe', 'USER', 'John', 'Doe', 'Mumbai',
                        'Environmental activist and community organizer',
                        ['air-quality', 'renewable-energy', 'urban-forestry'])
    jane = _create_user('jane.smith@example.com', 'janesmith', 'ANALYST', 'Jane', 'Smith', 'Bangalore',
                        'Climate scientist and researcher',
                        ['climate-change', 'data-science', 'research'])
    db.session.flush()

    for city in CITY_CHARACTERISTICS:
        db.session.add_all(simulate_climate_readings(city, hours=hours))

    now = utcnow()
    db.session.add_all([
        EnvironmentalAlert(
            alert_type='AIR_QUALITY', severity='HIGH', title='Poor Air Quality Alert',
            description='Air quality has deteriorated to unhealthy levels. Limit outdoor activities.',
            city='New Delhi', state='Delhi', country='India',
            latitude=28.6139, longitude=77.2090, radius=50,
            start_time=now, aqi_value=180, is_active=True,
        ),
        EnvironmentalAlert(
            alert_type='HEAT_WAVE', severity='MODERATE', title='Heat Wave Warning',
            description='Temperatures expected to reach 42°C. Stay hydrated and avoid sun exposure.',
            city='Mumbai', state='Maharashtra', country='India',
            latitude=19.0760, longitude=72.8777, radius=30,
            start_time=now, end_time=now + timedelta(days=3), temperature_value=42, is_active=True,
        ),
    ])

    delhi = Group(name='Delhi Green Warriors', slug='delhi-green-warriors',
                  description='Focused on local air quality and urban forestry in Delhi.',
                  city='New Delhi', state='Delhi', country='India',
                  category='air-quality', created_by=john)
    mumbai = Group(name='Mumbai Sustainability Network', slug='mumbai-sustainability-network',
                   description='Waste management and solar energy initiatives in Mumbai.',
                   city='Mumbai', state='Maharashtra', country='India',
                   category='waste-management', created_by=john)
    db.session.add_all([delhi, mumbai])
    db.session.flush()

    db.session.add_all([
        GroupMember(group_id=delhi.id, user_id=john.id, role='ADMIN'),
        GroupMember(group_id=delhi.id, user_id=jane.id, role='MEMBER'),
        GroupMember(group_id=mumbai.id, user_id=john.id, role='ADMIN'),
        GroupMember(group_id=mumbai.id, user_id=admin.id, role='MODERATOR'),
    ])

    tree_drive = Post(group=delhi, author=john, title='Community Tree Planting Drive This Weekend!',
                      content='Join us for a tree planting event at Central Park. We aim to plant '
                              '500 trees this season. Bring your friends and family!',
                      tags=['tree-planting', 'community', 'event'], likes=45, views=230, is_pinned=True)
    db.session.add_all([
        tree_drive,
        Post(group=mumbai, author=jane, title='Solar Panel Installation Workshop',
             content='Learn how to install and maintain solar panels for your home. '
                     'Free workshop next Saturday.',
             tags=['solar-energy', 'workshop', 'renewable-energy'], likes=32, views=156),
        Comment(post=tree_drive, author=jane, content='Great initiative! Count me in.', likes=8),
        Comment(post=tree_drive, author=admin,
                content='We can provide tools and saplings. Let me know what you need.', likes=12),
    ])

    db.session.add_all([
        EnvironmentalPledge(user=john, pledge_type='PLANT_TREES', quantity=50, unit='trees',
                            description='Plant 50 trees in my locality this year',
                            status='ACTIVE', start_date=now),
        EnvironmentalPledge(user=jane, pledge_type='REDUCE_DRIVING', quantity=100, unit='km',
                            description='Use public transport and reduce car usage by 100km per week',
                            status='ACTIVE', start_date=now),
        EnvironmentalPledge(user=admin, pledge_type='SAVE_ENERGY', quantity=500, unit='kWh',
                            description='Reduce home energy consumption by 500 kWh this month',
                            status='VERIFIED', start_date=now - timedelta(days=30), verified_at=now),
    ])

    shirts = SupplyChainItem(user_id=john.id, product_name='Organic Cotton T-Shirts', product_code='PROD-001',
                             category='Textiles', origin='Bangalore, Karnataka',
                             current_location='Mumbai, Maharashtra', destination='New Delhi, Delhi',
                             carbon_footprint=45.5, energy_used=120, water_used=2500, waste_generated=5.2,
                             status='IN_TRANSIT', temperature=25.5, humidity=65,
                             estimated_arrival=now + timedelta(days=2))
    panels = SupplyChainItem(user_id=jane.id, product_name='Solar Panels (200W)', product_code='PROD-002',
                             category='Renewable Energy Equipment', origin='Pune, Maharashtra',
                             current_location='Bangalore, Karnataka', destination='Bangalore, Karnataka',
                             carbon_footprint=120.8, energy_used=450, water_used=800, waste_generated=12.5,
                             status='ARRIVED', actual_arrival=now)
    db.session.add_all([shirts, panels])
    db.session.flush()

    db.session.add_all([
        SupplyChainEvent(item_id=shirts.id, event_type='departure', location='Bangalore, Karnataka',
                         latitude=12.9716, longitude=77.5946, description='Package departed from warehouse',
                         timestamp=now - timedelta(days=2)),
        SupplyChainEvent(item_id=shirts.id, event_type='checkpoint', location='Mumbai, Maharashtra',
                         latitude=19.0760, longitude=72.8777,
                         description='Package reached Mumbai distribution center',
                         timestamp=now - timedelta(days=1)),
        SupplyChainEvent(item_id=panels.id, event_type='arrival', location='Bangalore, Karnataka',
                         latitude=12.9716, longitude=77.5946, description='Package delivered successfully',
                         timestamp=now),
    ])

    db.session.commit()

    counts = {
        'users': User.query.count(),
        'climate_readings': ClimateReading.query.count(),
        'groups': Group.query.count(),
        'posts': Post.query.count(),
        'supply_chain_items': SupplyChainItem.query.count(),
    }
    logger.info('Seeded database: %s', counts)
    return counts
