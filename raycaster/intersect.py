import torch

from .geometry import Hit


def z_buffer(objects, ray):
    return torch.stack([obj.distance(ray) for obj in objects], dim=0)


def nearest_hit(scene, ray):
    """Closest intersection per ray over all scene objects.

    Ties go to the object added to the scene first.
    """
    if not scene.objects:
        return Hit.miss(ray.len)

    z = z_buffer(scene.objects, ray)
    # argmin returns the first minimum, which keeps ties in scene order
    index = torch.argmin(z, dim=0)
    dist = z.gather(0, index.unsqueeze(0)).squeeze(0)
    is_hit = dist.isfinite()
    index[~is_hit] = -1

    point = ray.evaluate(dist.masked_fill(~is_hit, 0))
    normal = torch.zeros_like(point)
    for idx, obj in enumerate(scene.objects):
        mask = index == idx
        if mask.count_nonzero() == 0:
            continue
        normal[mask] = obj.get_normal(point[mask])
    return Hit(dist, point, normal, index)


def occluded(objects, ray, max_dist=torch.inf):
    """True where any object is hit closer than `max_dist` along the ray."""
    blocked = torch.zeros(ray.len, dtype=torch.bool)
    for obj in objects:
        blocked |= obj.distance(ray) < max_dist
    return blocked
