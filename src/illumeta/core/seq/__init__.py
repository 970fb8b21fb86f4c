from .xna import *
