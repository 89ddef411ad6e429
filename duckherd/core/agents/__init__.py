"""
Agent classes for the duck herding simulation.
"""

from .base import Agent
from .duck import Duck
from .dog import Dog, wrap_angle

__all__ = ['Agent', 'Duck', 'Dog', 'wrap_angle']
