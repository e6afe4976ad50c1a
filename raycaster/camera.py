import logging

import torch

from .errors import InvalidGeometry, InvalidParameter
from .geometry import Ray, cross, unit, vec3

logger = logging.getLogger(__name__)


class ViewPlane:
    """Finite rectangle the camera looks through.

    The rectangle is given by `min`/`max` corners in the plane's local 2D
    space; `position` is the local origin in world space and `normal` points
    back toward the camera. Defaults give a 6x4 plane at z=5, matching a
    3:2 image such as 1200x800.
    """

    def __init__(self, min=(-3, -2), max=(3, 2), position=(0, 0, 5), normal=(0, 0, 1), up=(0, 1, 0)):
        self.set_size(min, max)
        self.position = vec3(position)
        self.normal = unit(vec3(normal))
        self.right, self.up = plane_axes(self.normal, vec3(up))

    def set_size(self, min, max):
        self.min = vec3(min)[:2]
        self.max = vec3(max)[:2]

    @property
    def width(self):
        return float(self.max[0] - self.min[0])

    @property
    def height(self):
        return float(self.max[1] - self.min[1])

    @property
    def aspect(self):
        return self.width / self.height

    def top_left(self):
        return torch.stack([self.min[0], self.max[1]])

    def top_right(self):
        return self.max

    def bottom_left(self):
        return self.min

    def bottom_right(self):
        return torch.stack([self.max[0], self.min[1]])

    def to_world(self, u, v):
        """(u, v) in [0, 1]^2 -> world point(s) on the plane."""
        u = torch.as_tensor(u, dtype=torch.float32).unsqueeze(-1)
        v = torch.as_tensor(v, dtype=torch.float32).unsqueeze(-1)
        x = self.min[0] + u * self.width
        y = self.min[1] + v * self.height
        return self.position + x * self.right + y * self.up


class Camera:
    def __init__(self, position=(0, 0, 25), view=None):
        self.position = vec3(position)
        self.view = view if view is not None else ViewPlane()

    @classmethod
    def look_at(cls, position, target, focus=20, size=(6, 4), up=(0, 1, 0)):
        position = vec3(position)
        normal = unit(position - vec3(target))
        w, h = size
        view = ViewPlane((-w / 2, -h / 2), (w / 2, h / 2), position - normal * focus, normal, up)
        return cls(position, view)

    def get_ray(self, u, v):
        if not (0 <= u <= 1 and 0 <= v <= 1):
            raise InvalidParameter(f"image coordinates out of range: u={u}, v={v}")
        return Ray(self.position, self.view.to_world(u, v) - self.position)

    def gen_rays(self, width, height, top=0, bottom=None, strict=False):
        """Primary rays for image rows [top, bottom), row-major.

        Returns the rays and a mask of the ones that are usable; a viewplane
        sample that coincides with the camera position has no direction.
        """
        bottom = height if bottom is None else bottom
        rows = bottom - top
        i = torch.arange(width, dtype=torch.float32)
        j = torch.arange(top, bottom, dtype=torch.float32)
        u = ((i + 0.5) / width).view([1, -1]).expand([rows, width])
        v = (1 - (j + 0.5) / height).view([-1, 1]).expand([rows, width])

        points = self.view.to_world(u.reshape(-1), v.reshape(-1))
        dir = points - self.position
        valid = dir.norm(dim=-1) > 0
        if not valid.all():
            count = int((~valid).sum())
            if strict:
                raise InvalidGeometry(f"{count} primary rays have zero length")
            logger.warning("%d primary rays have zero length; rendering them as background", count)
            dir[~valid] = -self.view.normal
        return Ray(self.position, dir), valid


def plane_axes(normal, up):
    right = cross(up, normal)
    if float(right.norm()) < 1e-6:
        # looking straight along `up`
        right = cross(vec3([0, 0, -1]), normal)
    right = unit(right)
    return right, cross(normal, right)
