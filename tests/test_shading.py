import math

import pytest
import torch

from raycaster import (AngularCone, Light, Plane, Ray, RenderSettings, Scene, Sphere,
                       SphereProxyCone, SpotLight, nearest_hit, shade)
from raycaster.geometry import vec3
from raycaster.lights import MAX_SPOT_ANGLE, MIN_SPOT_ANGLE
from raycaster.objects import color
from raycaster.shading import ambient, lambert, phong

EYE = vec3([30, 1, 0])


def hits_from_eye(scene, targets, eye=EYE):
    ray = Ray(eye, vec3(targets) - eye)
    hit = nearest_hit(scene, ray)
    assert hit.mask.all()
    return hit


# --- Local shading terms ---

def test_lambert_inverse_square():
    """Doubling the light distance cuts the diffuse term by four."""
    points = vec3([[0, 0, 0]])
    normals = vec3([[0, 1, 0]])
    diffuse = color('grey')
    near = lambert(points, normals, diffuse, vec3([0, 2, 0]), 1.0)
    far = lambert(points, normals, diffuse, vec3([0, 4, 0]), 1.0)
    assert torch.allclose(near, 4 * far, rtol=1e-5)


def test_lambert_ignores_lights_behind_surface():
    points = vec3([[0, 0, 0]])
    normals = vec3([[0, 1, 0]])
    assert (lambert(points, normals, color('grey'), vec3([0, -3, 0]), 5.0) == 0).all()


def test_lambert_non_positive_intensity_is_dark():
    points = vec3([[0, 0, 0]])
    normals = vec3([[0, 1, 0]])
    assert (lambert(points, normals, color('grey'), vec3([0, 3, 0]), -2.0) == 0).all()


def test_phong_adds_highlight_on_mirror_direction():
    points = vec3([[0, 0, 0]])
    normals = vec3([[0, 1, 0]])
    light, eye = vec3([-1, 1, 0]), vec3([1, 1, 0])
    diffuse, specular = color('black'), color('white')
    lit = phong(points, normals, diffuse, specular, 100, light, 2.0, eye)
    # n.h == 1 so the highlight is specular * I / d^2
    assert torch.allclose(lit, torch.full([1, 3], 1.0), rtol=1e-4)


def test_ambient_is_five_percent_of_diffuse():
    assert torch.allclose(ambient(vec3([1, 0.5, 0])), vec3([0.05, 0.025, 0]))


# --- Shadows ---

def test_shadow_under_sphere(shadow_scene):
    hit = hits_from_eye(shadow_scene, [[0, 0, 0], [10, 0, 0]])
    assert hit.index.tolist() == [0, 0]
    colors = shade(shadow_scene, hit, EYE, RenderSettings())
    assert (colors[0] == 0).all()
    assert (colors[1] > 0).all()


def test_shadows_can_be_disabled_per_object(shadow_scene):
    shadow_scene.objects[1].casts_shadows = False
    hit = hits_from_eye(shadow_scene, [[0, 0, 0]])
    colors = shade(shadow_scene, hit, EYE, RenderSettings())
    assert (colors[0] > 0).all()


def test_light_beyond_blocker_segment_is_not_shadowed():
    """A caster past the light does not block it."""
    scene = Scene(
        objects=[Plane([0, 0, 0], [0, 1, 0], width=100, height=100), Sphere([0, 20, 0], 1)],
        lights=[Light([0, 10, 0], 100)],
    )
    hit = hits_from_eye(scene, [[0, 0, 0]])
    assert (shade(scene, hit, EYE, RenderSettings())[0] > 0).all()


def test_spheres_receive_shadows_only_when_tagged():
    """Sphere-on-sphere shadows are off by default and opt-in per receiver."""
    eye = vec3([10, 1.5, 0])
    scene = Scene(
        objects=[Sphere([0, 0, 0], 1), Sphere([0, 5, 0], 1)],
        lights=[Light([0, 10, 0], 100)],
    )
    hit = hits_from_eye(scene, [[0, 1, 0]], eye=eye)
    assert int(hit.index[0]) == 0
    assert (shade(scene, hit, eye, RenderSettings())[0] > 0).all()

    scene.objects[0].receives_shadows = True
    assert (shade(scene, hit, eye, RenderSettings())[0] == 0).all()


def test_spotlights_are_never_shadow_tested(shadow_scene):
    shadow_scene.clear_lights()
    shadow_scene.add_spotlight(SpotLight([0, 10, 0], [0, 0, 0], intensity=100))
    hit = hits_from_eye(shadow_scene, [[0, 0, 0]])
    assert (shade(shadow_scene, hit, EYE, RenderSettings())[0] > 0).all()


def test_non_positive_light_intensity_contributes_nothing(shadow_scene):
    shadow_scene.lights[0].set_intensity(0)
    hit = hits_from_eye(shadow_scene, [[10, 0, 0]])
    assert (shade(shadow_scene, hit, EYE, RenderSettings())[0] == 0).all()


def test_ambient_setting(shadow_scene):
    hit = hits_from_eye(shadow_scene, [[0, 0, 0]])
    colors = shade(shadow_scene, hit, EYE, RenderSettings(ambient=True))
    assert torch.allclose(colors[0], 0.05 * color('dark_olive_green'))


def test_intensity_scale_is_linear(shadow_scene):
    hit = hits_from_eye(shadow_scene, [[10, 0, 0]])
    base = shade(shadow_scene, hit, EYE, RenderSettings())
    scaled = shade(shadow_scene, hit, EYE, RenderSettings(intensity_scale=3))
    assert torch.allclose(scaled, 3 * base, rtol=1e-5)


# --- Spotlights ---

def test_cone_proxy_excludes_far_points():
    spot = SpotLight([-20, 30, 45], [1, -5, 0], intensity=2, angle=15)
    eye = vec3([0, 0, 100])
    inside = SphereProxyCone().contains(spot, eye, vec3([[1, -5, 0], [-300, -5, 0]]))
    assert inside.tolist() == [True, False]


def test_spotlight_contribution_outside_cone_is_zero():
    spot = SpotLight([0, 30, 0], [0, 0, 0], intensity=500, angle=15)
    scene = Scene(objects=[Plane([0, 0, 0], [0, 1, 0], width=1000, height=1000)], spotlights=[spot])
    eye = vec3([0, 40, 100])
    hit = hits_from_eye(scene, [[0, 0, 0], [400, 0, -400]], eye=eye)
    colors = shade(scene, hit, eye, RenderSettings())
    assert (colors[0] > 0).all()
    assert (colors[1] == 0).all()


def test_angular_cone():
    spot = SpotLight([0, 10, 0], [0, 0, 0], angle=20)
    points = vec3([[0, 0, 0], [3, 0, 0], [5, 0, 0]])
    # tan(20 deg) * 10 ~= 3.64
    assert AngularCone().contains(spot, vec3([0, 0, 50]), points).tolist() == [True, True, False]


def test_cone_strategy_is_pluggable():
    spot = SpotLight([0, 10, 0], [0, 0, 0], intensity=100, angle=20)
    scene = Scene(objects=[Plane([0, 0, 0], [0, 1, 0], width=100, height=100)], spotlights=[spot])
    eye = vec3([0, 30, 30])
    hit = hits_from_eye(scene, [[8, 0, 0]], eye=eye)
    # inside the 25 unit proxy sphere, outside the 20 degree cone
    assert (shade(scene, hit, eye, RenderSettings())[0] > 0).any()
    assert (shade(scene, hit, eye, RenderSettings(cone=AngularCone()))[0] == 0).all()


def test_spotlight_cone_geometry():
    spot = SpotLight([-20, 30, 45], [1, -5, 0], angle=15)
    assert spot.cone_angle == pytest.approx(math.tan(math.radians(15)) * 50)
    assert torch.allclose(spot.direction, vec3([-21, 35, 45]))


def test_spotlight_angle_nudging_is_clamped():
    spot = SpotLight([0, 10, 0], [0, 0, 0], angle=49.5)
    assert spot.nudge_angle() == MAX_SPOT_ANGLE
    assert spot.nudge_angle() == MAX_SPOT_ANGLE
    spot.angle = 10.5
    assert spot.nudge_angle(increase=False) == MIN_SPOT_ANGLE
    assert spot.nudge_angle(increase=False) == MIN_SPOT_ANGLE
