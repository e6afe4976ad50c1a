from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import InvalidParameter
from .lights import SphereProxyCone


@dataclass
class RenderSettings:
    """Knobs consumed by a single render pass."""

    power: float = 100.0            # Phong exponent
    intensity_scale: float = 1.0    # global multiplier on every light's intensity
    ambient: bool = False           # add 0.05 * diffuse once per shaded pixel
    background: Optional[Any] = None  # overrides the scene background when set
    tile_rows: int = 32             # image rows traced per worker task
    workers: Optional[int] = None   # thread pool size, None lets the executor decide
    strict: bool = False            # raise on degenerate primary rays instead of drawing background
    cone: Any = field(default_factory=SphereProxyCone)

    def validate(self, width, height):
        for name, value in (('width', width), ('height', height), ('tile_rows', self.tile_rows)):
            if not isinstance(value, int) or value <= 0:
                raise InvalidParameter(f"{name} must be a positive integer, got {value!r}")
        if self.workers is not None and self.workers <= 0:
            raise InvalidParameter(f"workers must be positive, got {self.workers}")
        if self.power < 0:
            raise InvalidParameter(f"power must be non-negative, got {self.power}")
        if self.intensity_scale < 0:
            raise InvalidParameter(f"intensity_scale must be non-negative, got {self.intensity_scale}")
