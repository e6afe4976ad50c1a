import torch
from torch.nn.functional import normalize

from .geometry import EPSILON, Ray, distance, inner
from .intersect import occluded

AMBIENT = 0.05


def ambient(diffuse):
    return AMBIENT * diffuse


def falloff(intensity, light_position, points):
    to_light = light_position - points
    dist_sq = inner(to_light, to_light).clamp_min(EPSILON**2)
    return max(intensity, 0) / dist_sq


def lambert(points, normals, diffuse, light_position, intensity):
    to_light = normalize(light_position - points, dim=-1)
    return diffuse * falloff(intensity, light_position, points) * inner(normals, to_light).clamp_min(0)


def phong(points, normals, diffuse, specular, power, light_position, intensity, eye):
    to_light = normalize(light_position - points, dim=-1)
    to_eye = normalize(eye - points, dim=-1)
    half = normalize(to_light + to_eye, dim=-1)
    highlight = specular * falloff(intensity, light_position, points) * inner(normals, half).clamp_min(0) ** power
    return lambert(points, normals, diffuse, light_position, intensity) + highlight


def spot_lambert(points, normals, diffuse, light, intensity, eye, cone):
    inside = cone.contains(light, eye, points)
    return lambert(points, normals, diffuse, light.position, intensity) * inside.unsqueeze(-1)


def shadowed(scene, points, receives, light_position):
    """Shadow test toward one point light for the points that receive shadows.

    Only objects tagged `casts_shadows` occlude, and only between the point
    and the light.
    """
    blocked = torch.zeros(len(points), dtype=torch.bool)
    casters = [obj for obj in scene.objects if obj.casts_shadows]
    receives = receives & (distance(light_position, points) > EPSILON)
    if not casters or not receives.any():
        return blocked

    origin = points[receives]
    to_light = light_position - origin
    shadow_ray = Ray(origin, to_light)
    blocked[receives] = occluded(casters, shadow_ray, to_light.norm(dim=-1))
    return blocked


def shade(scene, hit, eye, settings):
    """Colour for every entry of `hit`, which must contain only actual hits."""
    diffuse, specular, receives = scene.materials()
    diffuse, specular, receives = diffuse[hit.index], specular[hit.index], receives[hit.index]
    points, normals = hit.point, hit.normal

    color = torch.zeros_like(points)
    if settings.ambient:
        color += ambient(diffuse)

    for light in scene.lights:
        intensity = light.intensity * settings.intensity_scale
        if intensity <= 0:
            continue
        lit = phong(points, normals, diffuse, specular, settings.power, light.position, intensity, eye)
        blocked = shadowed(scene, points, receives, light.position)
        color += lit * blocked.logical_not().unsqueeze(-1)

    for spot in scene.spotlights:
        intensity = spot.intensity * settings.intensity_scale
        if intensity <= 0:
            continue
        color += spot_lambert(points, normals, diffuse, spot, intensity, eye, settings.cone)
    return color
