"""
Models Package

Exports all models for easy importing.
"""

from climatrix.models.user import User, Profile
from climatrix.models.climate import ClimateReading, EnvironmentalAlert
from climatrix.models.community import Group, GroupMember, Post, Comment
from climatrix.models.pledge import EnvironmentalPledge
from climatrix.models.supply_chain import SupplyChainItem, SupplyChainEvent, SupplyChainAlert

__all__ = [
    'User',
    'Profile',
    'ClimateReading',
    'EnvironmentalAlert',
    'Group',
    'GroupMember',
    'Post',
    'Comment',
    'EnvironmentalPledge',
    'SupplyChainItem',
    'SupplyChainEvent',
    'SupplyChainAlert',
]
