from collections import namedtuple
from enum import Enum


class AngleMode(Enum):
    RADIANS = 'rad'
    DEGREES = 'deg'

    def __str__(self):
        return self.name


class Context(namedtuple('Context', 'angle_mode memory')):
    '''
    What an evaluation may read from the outside world.

    Immutable. Whoever owns the memory slot and angle mode hands a fresh one
    to every evaluation; derive changed ones with _replace().
    '''
    __slots__ = ()

    def __new__(cls, angle_mode=AngleMode.RADIANS, memory=0.0):
        return super().__new__(cls, angle_mode, float(memory))

    @property
    def degrees(self):
        return self.angle_mode is AngleMode.DEGREES
