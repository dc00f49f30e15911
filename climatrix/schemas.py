"""
Request Schemas

Every endpoint declares the exact shape it accepts. Wire names are camelCase;
unknown fields are rejected.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel

from climatrix.constants import PledgeStatus, PledgeType, Severity, SupplyChainStatus


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='forbid',
    )

    def field_values(self):
        """Fields the client sent with a value, as a snake_case dict."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
Page = Annotated[int, Field(gt=0, le=100_000)]


class PageQuery(RequestSchema):
    page: Page = 1
    limit: int = Field(20, gt=0, le=50)


# --- Auth ---

class SignupRequest(RequestSchema):
    email: EmailStr
    username: str = Field(min_length=3, max_length=30, pattern=r'^[a-zA-Z0-9_]+$')
    password: str = Field(min_length=8)
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @field_validator('password')
    @classmethod
    def check_password_strength(cls, password):
        if not any(c.isupper() for c in password):
            raise ValueError('Password must contain at least one uppercase letter')
        if not any(c.islower() for c in password):
            raise ValueError('Password must contain at least one lowercase letter')
        if not any(c.isdigit() for c in password):
            raise ValueError('Password must contain at least one number')
        return password


class LoginRequest(RequestSchema):
    email: EmailStr
    password: str = Field(min_length=1)


class UpdateProfileRequest(RequestSchema):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = Field(None, max_length=500)
    website: Optional[Union[Literal[''], HttpUrl]] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    phone: Optional[str] = None
    organization: Optional[str] = None
    interests: Optional[List[str]] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


# --- Climate data ---

class LatestClimateQuery(RequestSchema):
    city: str = Field(min_length=1)


class ClimateQuery(LatestClimateQuery):
    hours: int = Field(24, ge=1, le=168)


class CreateClimateReadingRequest(RequestSchema):
    location: str = Field(min_length=1)
    city: Optional[str] = None
    state: Optional[str] = None
    country: str = Field(min_length=1)
    latitude: Latitude
    longitude: Longitude
    temperature: float
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    aqi: Optional[int] = Field(None, ge=0, le=500)
    pm25: Optional[float] = Field(None, ge=0)
    pm10: Optional[float] = None
    co: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    o3: Optional[float] = None
    humidity: Optional[float] = Field(None, ge=0, le=100)
    pressure: Optional[float] = None
    visibility: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = Field(None, ge=0, le=360)
    rainfall: Optional[float] = None
    snowfall: Optional[float] = None
    cloud_cover: Optional[int] = Field(None, ge=0, le=100)
    uv_index: Optional[float] = None
    solar_radiation: Optional[float] = None
    source: str = Field(min_length=1)
    reading_time: Optional[datetime] = None


# --- Alerts ---

class AlertQuery(RequestSchema):
    city: Optional[str] = None
    severity: Optional[Severity] = None
    page: Page = 1
    limit: int = Field(20, gt=0, le=100)


class UpdateAlertRequest(RequestSchema):
    is_active: bool


# --- Community ---

class GroupQuery(PageQuery):
    city: Optional[str] = None
    category: Optional[str] = None


class CreateGroupRequest(RequestSchema):
    name: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=1000)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    category: Optional[str] = None
    is_public: bool = True


class PostQuery(PageQuery):
    group_id: Optional[int] = Field(None, gt=0)


class CreatePostRequest(RequestSchema):
    group_id: Optional[int] = Field(None, gt=0)
    title: str = Field(min_length=5, max_length=200)
    content: str = Field(min_length=10, max_length=10000)
    images: List[HttpUrl] = []
    tags: List[str] = []


class CreateCommentRequest(RequestSchema):
    content: str = Field(min_length=1, max_length=2000)


# --- Pledges ---

class PledgeQuery(PageQuery):
    status: Optional[PledgeStatus] = None


class CreatePledgeRequest(RequestSchema):
    pledge_type: PledgeType
    quantity: int = Field(gt=0)
    unit: str = Field(min_length=1)
    description: Optional[str] = Field(None, max_length=500)
    start_date: datetime
    end_date: Optional[datetime] = None


class UpdatePledgeStatusRequest(RequestSchema):
    status: Literal['COMPLETED', 'CANCELLED']


# --- Supply chain ---

class CreateSupplyChainItemRequest(RequestSchema):
    product_name: str = Field(min_length=1)
    product_code: Optional[str] = Field(None, min_length=1, max_length=64)
    category: str = Field(min_length=1)
    origin: str = Field(min_length=1)
    current_location: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    carbon_footprint: Optional[float] = None
    energy_used: Optional[float] = None
    water_used: Optional[float] = None
    waste_generated: Optional[float] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    estimated_arrival: Optional[datetime] = None


class UpdateSupplyChainItemRequest(RequestSchema):
    current_location: Optional[str] = Field(None, min_length=1)
    status: Optional[SupplyChainStatus] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    actual_arrival: Optional[datetime] = None


class CreateSupplyChainEventRequest(RequestSchema):
    event_type: str = Field(min_length=1)
    location: str = Field(min_length=1)
    latitude: Optional[Latitude] = None
    longitude: Optional[Longitude] = None
    description: Optional[str] = None
    timestamp: Optional[datetime] = None


# --- Weather ---

class CityQuery(RequestSchema):
    city: str = Field(min_length=1)


class CoordinatesQuery(RequestSchema):
    lat: Latitude
    lon: Longitude

