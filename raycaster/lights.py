import math

from torch.nn.functional import normalize

from .geometry import Ray, inner, vec3
from .objects import Sphere

MIN_SPOT_ANGLE = 10.0
MAX_SPOT_ANGLE = 50.0
ANGLE_STEP = 0.5


class Light:
    def __init__(self, position, intensity=0.2, radius=1.5):
        self.position = vec3(position)
        self.intensity = intensity
        # picking radius for interactive callers, unused by the renderer
        self.radius = radius

    def set_intensity(self, intensity):
        self.intensity = intensity


class SpotLight(Light):
    def __init__(self, position, aim_point, intensity=2.0, angle=15.0, cone_height=50.0):
        super().__init__(position, intensity)
        self.aim_point = vec3(aim_point)
        self.angle = angle
        self.cone_height = cone_height

    @property
    def direction(self):
        return self.position - self.aim_point

    @property
    def cone_angle(self):
        # radius of the cone base, as drawn by the viewer
        return math.tan(math.radians(self.angle)) * self.cone_height

    def nudge_angle(self, increase=True):
        step = ANGLE_STEP if increase else -ANGLE_STEP
        self.angle = min(MAX_SPOT_ANGLE, max(MIN_SPOT_ANGLE, self.angle + step))
        return self.angle


class SphereProxyCone:
    """Approximates cone membership with a sphere of radius cone_height/2 at the
    aim point, probed by a ray from the eye through each shaded point."""

    def contains(self, light, eye, points):
        probe = Ray(eye, points - eye)
        return Sphere(light.aim_point, light.cone_height / 2).distance(probe).isfinite()


class AngularCone:
    """True cone test: the point lies within `angle` degrees of the light's axis."""

    def contains(self, light, eye, points):
        axis = normalize(light.aim_point - light.position, dim=-1)
        to_point = normalize(points - light.position, dim=-1)
        return inner(to_point, axis).squeeze(-1) >= math.cos(math.radians(light.angle))
