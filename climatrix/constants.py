"""
Enumerated values shared by the models and the request schemas.
"""

from typing import Literal, get_args

Role = Literal['USER', 'ANALYST', 'ADMIN']
AlertType = Literal[
    'AIR_QUALITY', 'HEAT_WAVE', 'COLD_WAVE', 'UV_WARNING', 'STORM',
    'FLOOD', 'DROUGHT', 'WILDFIRE', 'POLLUTION_SPIKE',
]
# Ordered from least to most severe
Severity = Literal['LOW', 'MODERATE', 'HIGH', 'VERY_HIGH', 'EXTREME']
MemberRole = Literal['ADMIN', 'MODERATOR', 'MEMBER']
PledgeType = Literal[
    'PLANT_TREES', 'REDUCE_DRIVING', 'SAVE_ENERGY',
    'REDUCE_WASTE', 'RENEWABLE_ENERGY', 'WATER_CONSERVATION',
]
PledgeStatus = Literal['ACTIVE', 'COMPLETED', 'VERIFIED', 'CANCELLED']
SupplyChainStatus = Literal['PENDING', 'IN_TRANSIT', 'ARRIVED', 'DELAYED', 'CANCELLED', 'DELIVERED']

ROLES = get_args(Role)
ALERT_TYPES = get_args(AlertType)
SEVERITIES = get_args(Severity)
MEMBER_ROLES = get_args(MemberRole)
PLEDGE_TYPES = get_args(PledgeType)
PLEDGE_STATUSES = get_args(PledgeStatus)
SUPPLY_CHAIN_STATUSES = get_args(SupplyChainStatus)
