"""
Climate Reading and Environmental Alert Models
"""

from climatrix.constants import ALERT_TYPES, SEVERITIES
from climatrix.extensions import db
from climatrix.utils import isoformat, utcnow

# Metric columns, wire name -> attribute name
READING_METRICS = {
    'temperature': 'temperature',
    'feelsLike': 'feels_like',
    'tempMin': 'temp_min',
    'tempMax': 'temp_max',
    'aqi': 'aqi',
    'pm25': 'pm25',
    'pm10': 'pm10',
    'co': 'co',
    'no2': 'no2',
    'so2': 'so2',
    'o3': 'o3',
    'humidity': 'humidity',
    'pressure': 'pressure',
    'visibility': 'visibility',
    'windSpeed': 'wind_speed',
    'windDirection': 'wind_direction',
    'rainfall': 'rainfall',
    'snowfall': 'snowfall',
    'cloudCover': 'cloud_cover',
    'uvIndex': 'uv_index',
    'solarRadiation': 'solar_radiation',
}

HISTORY_FIELDS = ('temperature', 'feelsLike', 'aqi', 'pm25', 'humidity',
                  'uvIndex', 'rainfall', 'windSpeed')


class ClimateReading(db.Model):
    """One weather/air-quality snapshot for a place; never mutated."""
    __tablename__ = 'climate_readings'
    __table_args__ = (
        db.Index('ix_climate_readings_city_time', 'city', 'reading_time'),
    )

    id = db.Column(db.Integer, primary_key=True)
    location = db.Column(db.String(200), nullable=False)
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    country = db.Column(db.String(100), nullable=False)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)

    temperature = db.Column(db.Float, nullable=False)  # Celsius
    feels_like = db.Column(db.Float)
    temp_min = db.Column(db.Float)
    temp_max = db.Column(db.Float)
    aqi = db.Column(db.Integer, nullable=False)
    pm25 = db.Column(db.Float)  # µg/m³
    pm10 = db.Column(db.Float)  # µg/m³
    co = db.Column(db.Float)
    no2 = db.Column(db.Float)
    so2 = db.Column(db.Float)
    o3 = db.Column(db.Float)
    humidity = db.Column(db.Float)  # %
    pressure = db.Column(db.Float)  # hPa
    visibility = db.Column(db.Float)  # metres
    wind_speed = db.Column(db.Float)
    wind_direction = db.Column(db.Float)  # degrees
    rainfall = db.Column(db.Float)
    snowfall = db.Column(db.Float)
    cloud_cover = db.Column(db.Integer)
    uv_index = db.Column(db.Float)
    solar_radiation = db.Column(db.Float)

    source = db.Column(db.String(100), nullable=False)
    reading_time = db.Column(db.DateTime, default=utcnow, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        data = {
            'id': self.id,
            'location': self.location,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'source': self.source,
            'readingTime': isoformat(self.reading_time),
            'createdAt': isoformat(self.created_at),
        }
        for key, attr in READING_METRICS.items():
            data[key] = getattr(self, attr)
        return data

    def to_history_dict(self):
        data = {
            'id': self.id,
            'location': self.location,
            'readingTime': isoformat(self.reading_time),
        }
        for key in HISTORY_FIELDS:
            data[key] = getattr(self, READING_METRICS[key])
        return data

    def __repr__(self):
        return f'<ClimateReading {self.city} AQI:{self.aqi} at {self.reading_time}>'


class EnvironmentalAlert(db.Model):
    """Active hazard notice for an area"""
    __tablename__ = 'environmental_alerts'

    id = db.Column(db.Integer, primary_key=True)
    alert_type = db.Column(db.Enum(*ALERT_TYPES, name='alert_type'), nullable=False)
    severity = db.Column(db.Enum(*SEVERITIES, name='alert_severity'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    country = db.Column(db.String(100))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    radius = db.Column(db.Float)  # km
    start_time = db.Column(db.DateTime, default=utcnow, nullable=False)
    end_time = db.Column(db.DateTime)
    aqi_value = db.Column(db.Integer)
    temperature_value = db.Column(db.Float)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'alertType': self.alert_type,
            'severity': self.severity,
            'title': self.title,
            'description': self.description,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'radius': self.radius,
            'startTime': isoformat(self.start_time),
            'endTime': isoformat(self.end_time),
            'aqiValue': self.aqi_value,
            'temperatureValue': self.temperature_value,
            'isActive': self.is_active,
        }

    def __repr__(self):
        return f'<EnvironmentalAlert {self.alert_type} {self.severity} {self.city}>'
