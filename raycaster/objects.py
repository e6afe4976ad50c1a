import torch
from torch.nn.functional import normalize

from .errors import InvalidGeometry, InvalidParameter
from .geometry import EPSILON, PARALLEL_EPSILON, Hit, cross, inner, unit, vec3

PALETTE = {
    'black': (0, 0, 0),
    'white': (255, 255, 255),
    'grey': (128, 128, 128),
    'light_gray': (211, 211, 211),
    'dark_olive_green': (85, 107, 47),
    'dark_blue': (0, 0, 139),
    'dark_green': (0, 100, 0),
    'blue': (0, 0, 255),
    'purple': (128, 0, 128),
}


def color(c):
    """Named palette colour (0-255 channels) or an RGB triple already in [0, 1]."""
    if isinstance(c, str):
        if c not in PALETTE:
            raise InvalidParameter(f"unknown colour {c!r}")
        return vec3(PALETTE[c]) / 255
    return vec3(c)


class SceneObject:
    casts_shadows = True
    receives_shadows = False

    def __init__(self, position, diffuse='grey', specular='light_gray',
                 casts_shadows=None, receives_shadows=None):
        self.position = vec3(position)
        self.diffuse_color = color(diffuse)
        self.specular_color = color(specular)
        if casts_shadows is not None:
            self.casts_shadows = casts_shadows
        if receives_shadows is not None:
            self.receives_shadows = receives_shadows

    def distance(self, ray):
        raise NotImplementedError

    def get_normal(self, point):
        raise NotImplementedError

    def intersect(self, ray, index=0):
        dist = self.distance(ray)
        is_hit = dist.isfinite()
        point = ray.evaluate(dist.masked_fill(~is_hit, 0))
        normal = torch.zeros_like(point)
        normal[is_hit] = self.get_normal(point[is_hit])
        obj_index = torch.full(dist.shape, -1, dtype=torch.long)
        obj_index[is_hit] = index
        return Hit(dist, point, normal, obj_index)


class Plane(SceneObject):
    casts_shadows = False
    receives_shadows = True

    def __init__(self, position, normal=(0, 1, 0), diffuse='dark_olive_green',
                 width=20, height=20, width_dir=None, **kwargs):
        super().__init__(position, diffuse=diffuse, **kwargs)
        self.normal = unit(vec3(normal))
        self.width = width
        self.height = height
        if width_dir is None:
            width_dir = default_width_dir(self.normal)
        self.width_dir = unit(vec3(width_dir))
        if abs(float(inner(self.width_dir, self.normal))) > PARALLEL_EPSILON:
            raise InvalidGeometry("normal vector and width direction not perpendicular")
        self.height_dir = cross(self.normal, self.width_dir)

    def distance(self, ray):
        denom = inner(ray.dir, self.normal).squeeze(-1)
        parallel = denom.abs() < PARALLEL_EPSILON
        dist = inner(self.position - ray.origin, self.normal).squeeze(-1) / denom.masked_fill(parallel, 1)

        center_to_hit = ray.evaluate(dist) - self.position
        w = inner(center_to_hit, self.width_dir).squeeze(-1).abs()
        h = inner(center_to_hit, self.height_dir).squeeze(-1).abs()
        outside = (w >= self.width / 2) | (h >= self.height / 2)

        dist[parallel | outside | (dist <= EPSILON)] = torch.inf
        return dist

    def get_normal(self, point):
        return self.normal.expand_as(point)


class Sphere(SceneObject):
    def __init__(self, center, radius=1.0, diffuse='light_gray', **kwargs):
        super().__init__(center, diffuse=diffuse, **kwargs)
        if radius <= 0:
            raise InvalidGeometry(f"sphere radius must be positive, got {radius}")
        self.radius = radius

    @property
    def center(self):
        return self.position

    def distance(self, ray):
        center_to_origin = ray.origin - self.position
        b = inner(center_to_origin, ray.dir).squeeze(-1)
        c = inner(center_to_origin, center_to_origin).squeeze(-1) - self.radius**2
        disc = b**2 - c

        root = disc.clamp_min(0).sqrt()
        near, far = -b - root, -b + root
        dist = torch.where(near > EPSILON, near, far)
        dist[(disc < 0) | (dist <= EPSILON)] = torch.inf
        return dist

    def get_normal(self, point):
        return normalize(point - self.position, dim=-1)


def default_width_dir(normal):
    # horizontal planes keep width along world X and height along world Z
    up = vec3([0, 1, 0])
    if abs(float(inner(normal, up))) > 1 - PARALLEL_EPSILON:
        return vec3([1, 0, 0])
    return unit(cross(up, normal))
