import logging

from .camera import Camera, ViewPlane
from .config import RenderSettings
from .errors import InvalidGeometry, InvalidParameter, RenderError
from .geometry import Hit, Ray
from .intersect import nearest_hit, occluded
from .lights import AngularCone, Light, SphereProxyCone, SpotLight
from .objects import Plane, SceneObject, Sphere
from .render import Image, render
from .scene import Scene
from .shading import shade

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'AngularCone', 'Camera', 'Hit', 'Image', 'InvalidGeometry', 'InvalidParameter',
    'Light', 'Plane', 'Ray', 'RenderError', 'RenderSettings', 'Scene', 'SceneObject',
    'Sphere', 'SphereProxyCone', 'SpotLight', 'ViewPlane', 'nearest_hit', 'occluded',
    'render', 'shade',
]
