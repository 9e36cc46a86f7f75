import math

import pytest

from softraster.config import CLOCKWISE, COUNTER_CLOCKWISE, PROJECTION_ORTHOGRAPHIC
from softraster.culling import (
    canonical_winding,
    face_normal,
    is_backface,
    signed_area,
    winding_of,
)
from softraster.pipeline import Camera, project
from softraster.vecmath import Vec2, Vec3

V0 = Vec3(0.0, 0.0, 0.0)
V1 = Vec3(1.0, 0.0, 0.0)
V2 = Vec3(0.0, 1.0, 0.0)

TRIANGLES = [
    (Vec2(0.0, 0.0), Vec2(10.0, 0.0), Vec2(0.0, 10.0)),
    (Vec2(0.0, 0.0), Vec2(0.0, 10.0), Vec2(10.0, 0.0)),
    (Vec2(3.5, -2.0), Vec2(-7.0, 4.25), Vec2(12.0, 9.0)),
    (Vec2(1.0, 1.0), Vec2(2.0, 2.0), Vec2(3.0, 3.0)),
]


def test_unit_triangle_front_from_minus_z():
    assert not is_backface(V0, V1, V2, Vec3(0.0, 0.0, -5.0))


def test_unit_triangle_culled_from_plus_z():
    assert is_backface(V0, V1, V2, Vec3(0.0, 0.0, 5.0))


def test_clockwise_front_flips_the_test():
    assert is_backface(V0, V1, V2, Vec3(0.0, 0.0, -5.0), front=CLOCKWISE)
    assert not is_backface(V0, V1, V2, Vec3(0.0, 0.0, 5.0), front=CLOCKWISE)


def test_edge_on_face_is_culled():
    eye = Vec3(5.0, 5.0, 0.0)
    assert is_backface(V0, V1, V2, eye, front=COUNTER_CLOCKWISE)
    assert is_backface(V0, V1, V2, eye, front=CLOCKWISE)


def test_face_normal():
    assert face_normal(V0, V1, V2) == Vec3(0.0, 0.0, 1.0)
    assert face_normal(V0, V1, Vec3(2.0, 0.0, 0.0)) == Vec3(0.0, 0.0, 0.0)


def test_front_face_appears_counter_clockwise_on_screen():
    # the world-space test and the on-screen winding must agree
    camera = Camera.looking_at(Vec3(0.0, 0.0, -5.0), Vec3(0.0, 0.0, 0.0), fov=math.radians(60.0), aspect=1.0)
    mvp = camera.projection_matrix() @ camera.view_matrix()
    a, b, c = (project(v, mvp, 100, 100) for v in (V0, V1, V2))
    assert winding_of(a, b, c) == COUNTER_CLOCKWISE


@pytest.mark.parametrize("tri", TRIANGLES)
def test_canonical_winding_is_idempotent(tri):
    once = canonical_winding(*tri)
    assert canonical_winding(*once) == once
    assert signed_area(*once) >= 0.0
    assert set(once) == set(tri)
    assert once[0] == tri[0]


def test_winding_of():
    assert winding_of(*TRIANGLES[0]) == CLOCKWISE
    assert winding_of(*TRIANGLES[1]) == COUNTER_CLOCKWISE
    assert winding_of(*TRIANGLES[3]) is None


@pytest.mark.parametrize("tri", [
    (Vec3(5.0, 0.0, 0.0), Vec3(5.0, 1.0, 0.0), Vec3(4.8, 0.0, -1.0)),
    (Vec3(5.0, 0.0, 0.0), Vec3(4.8, 0.0, -1.0), Vec3(5.0, 1.0, 0.0)),
    (Vec3(-4.0, 2.0, 1.0), Vec3(-3.0, 2.5, 3.0), Vec3(-4.5, 3.0, 0.5)),
    (V0, V1, V2),
])
def test_orthographic_cull_agrees_with_screen_winding(tri):
    camera = Camera.looking_at(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 0.0), aspect=1.0,
                               projection=PROJECTION_ORTHOGRAPHIC, ortho_height=12.0)
    mvp = camera.projection_matrix() @ camera.view_matrix()
    a, b, c = (project(v, mvp, 100, 100) for v in tri)
    on_screen_front = winding_of(a, b, c) == COUNTER_CLOCKWISE
    assert is_backface(*tri, camera.position, view_dir=camera.forward) != on_screen_front
