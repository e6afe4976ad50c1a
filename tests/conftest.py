"""Shared scenes for the renderer tests."""

import pytest

from raycaster import Camera, Light, Plane, Scene, Sphere


@pytest.fixture
def reference_scene():
    """Ground plane, one purple sphere and a single point light."""
    return Scene(
        objects=[
            Plane([0, -5, 0], [0, 1, 0], diffuse='dark_blue', width=600, height=400),
            Sphere([0, 1, -2], 1, diffuse='purple'),
        ],
        lights=[Light([100, 150, 150], 0.2)],
    )


@pytest.fixture
def reference_camera():
    return Camera.look_at([0, 350, 400], [0, 0, 0])


@pytest.fixture
def shadow_scene():
    """Ground plane with a sphere hovering between it and a point light overhead."""
    return Scene(
        objects=[
            Plane([0, 0, 0], [0, 1, 0], width=100, height=100),
            Sphere([0, 5, 0], 1),
        ],
        lights=[Light([0, 10, 0], 100)],
    )
