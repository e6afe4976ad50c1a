import logging
import time
from concurrent.futures import ThreadPoolExecutor

import torch

from .config import RenderSettings
from .geometry import device
from .intersect import nearest_hit
from .objects import color
from .shading import shade

logger = logging.getLogger(__name__)


class Image:
    """8-bit RGB grid, shape (height, width, 3), row 0 at the top."""

    def __init__(self, pixels):
        self.pixels = pixels

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def __getitem__(self, index):
        row, col = index
        return self.pixels[row, col]

    def numpy(self):
        return self.pixels.cpu().numpy()


def to_rgb8(colors):
    return (colors.nan_to_num(0).clamp(0, 1) * 255).round().to(torch.uint8)


def trace_rows(scene, camera, width, height, top, bottom, settings):
    ray, valid = camera.gen_rays(width, height, top, bottom, strict=settings.strict)
    background = scene.background if settings.background is None else color(settings.background)

    hit = nearest_hit(scene, ray)
    mask = hit.mask & valid
    image = background.expand([ray.len, 3]).clone()
    if mask.count_nonzero() > 0:
        image[mask] = shade(scene, hit[mask], camera.position, settings)
    return to_rgb8(image).view([bottom - top, width, 3])


def render(scene, camera, width=1200, height=800, settings=None):
    settings = settings or RenderSettings()
    settings.validate(width, height)

    pixels = torch.zeros([height, width, 3], dtype=torch.uint8)
    bands = [(top, min(top + settings.tile_rows, height)) for top in range(0, height, settings.tile_rows)]

    def work(band):
        top, bottom = band
        # the default device is per thread
        with torch.device(device):
            pixels[top:bottom] = trace_rows(scene, camera, width, height, top, bottom, settings)

    start_time = time.time()
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        list(pool.map(work, bands))
    end_time = time.time()
    logger.info("Traced %d primary rays in %d bands. Took %.2f seconds.",
                width * height, len(bands), end_time - start_time)
    return Image(pixels)
