"""Food, walls and portals."""
from .base import Entity


class Food(Entity):
    """The single piece of food. Respawned in place every time it is eaten."""
    color_key = 'food'


class Wall(Entity):
    """An obstacle cell, added each time food is eaten in walls mode."""
    color_key = 'wall'


class Portal(Entity):
    """One end of a portal pair (portal mode)."""
    color_key = 'portal'
