import math

import numpy as np
import pytest

from softraster.errors import DegenerateMatrixError, IndexOutOfRangeError, InvalidMeshError
from softraster.pipeline import Camera, Mesh, project
from softraster.scene import cube_mesh
from softraster.transforms import look_at, perspective
from softraster.vecmath import Vec3

W, H = 800, 600


def _mvp_from(eye, target, near=0.1, far=100.0):
    view = look_at(eye, target, Vec3(0.0, 1.0, 0.0))
    return perspective(math.radians(60.0), W / H, near, far) @ view


def test_point_behind_eye_is_skipped():
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    for v in (Vec3(0.0, 0.0, -1.0), Vec3(3.0, -2.0, -0.5), Vec3(0.0, 0.0, -1e6)):
        assert project(v, mvp, W, H) is None
        assert project(v, mvp, W, H, depth_range=(0.0, 1.0)) is None


def test_point_on_eye_plane_is_skipped():
    # w == 0: would divide by zero
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    assert project(Vec3(0.0, 0.0, 0.0), mvp, W, H) is None
    assert project(Vec3(1.0, 1.0, 0.0), mvp, W, H) is None


def test_point_in_front_projects_to_centre():
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    p = project(Vec3(0.0, 0.0, 5.0), mvp, W, H)
    assert abs(p.x - W / 2) < 1e-9
    assert abs(p.y - H / 2) < 1e-9


def test_screen_y_points_down():
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    up = project(Vec3(0.0, 1.0, 5.0), mvp, W, H)
    right = project(Vec3(1.0, 0.0, 5.0), mvp, W, H)
    assert up.y < H / 2
    assert right.x > W / 2


def test_depth_range_rejection_is_optional():
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), near=1.0, far=10.0)
    beyond_far = Vec3(0.0, 0.0, 20.0)
    inside_near = Vec3(0.0, 0.0, 0.5)
    assert project(beyond_far, mvp, W, H, depth_range=(0.0, 1.0)) is None
    assert project(inside_near, mvp, W, H, depth_range=(0.0, 1.0)) is None
    assert project(beyond_far, mvp, W, H) is not None
    assert project(inside_near, mvp, W, H) is not None


def test_clamp_keeps_point_inside_viewport():
    mvp = _mvp_from(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
    v = Vec3(100.0, -100.0, 1.0)
    free = project(v, mvp, W, H)
    assert free.x > W and free.y > H
    clamped = project(v, mvp, W, H, clamp=True)
    assert clamped.x == W - 1
    assert clamped.y == H - 1


def test_cube_projection_is_centred_and_symmetric():
    camera = Camera.looking_at(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 0.0),
                               fov=math.radians(60.0), aspect=4.0 / 3.0, near=0.1, far=100.0)
    mvp = camera.projection_matrix() @ camera.view_matrix()
    mesh = cube_mesh()

    points = {}
    for v in mesh.vertices:
        p = project(v, mvp, W, H, depth_range=(0.0, 1.0))
        assert p is not None
        assert 0.0 <= p.x < W
        assert 0.0 <= p.y < H
        points[(v.x, v.y, v.z)] = p

    for (x, y, z), p in points.items():
        mirror = points[(-x, -y, z)]
        assert abs((p.x + mirror.x) - W) < 1e-9
        assert abs((p.y + mirror.y) - H) < 1e-9

    # the near face (z = -1) looks bigger than the far one
    near_corner = points[(1.0, 1.0, -1.0)]
    far_corner = points[(1.0, 1.0, 1.0)]
    assert near_corner.x > far_corner.x > W / 2
    assert near_corner.y < far_corner.y < H / 2


def test_mesh_rejects_out_of_range_index():
    verts = [Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)]
    with pytest.raises(IndexOutOfRangeError):
        Mesh(verts, [0, 1, 3], [(255, 0, 0)])
    with pytest.raises(IndexOutOfRangeError):
        Mesh(verts, [0, -1, 2], [(255, 0, 0)])


def test_mesh_rejects_inconsistent_arrays():
    verts = [Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)]
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, 1], [])
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, 1, 2], [])
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, 1, 2], [(300, 0, 0)])


def test_mesh_rejects_non_integer_indices():
    verts = [Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)]
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, 1.7, 2], [(255, 0, 0)])
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, 1, 2.0], [(255, 0, 0)])
    with pytest.raises(InvalidMeshError):
        Mesh(verts, [0, True, 2], [(255, 0, 0)])
    mesh = Mesh(verts, np.array([0, 1, 2]), [(255, 0, 0)])
    assert mesh.indices == (0, 1, 2)


def test_mesh_triangles_in_list_order():
    mesh = cube_mesh()
    tris = list(mesh.triangles())
    assert mesh.triangle_count == 12
    assert len(tris) == 12
    assert tris[0][:3] == (0, 1, 2)
    assert tris[11][:3] == (4, 1, 0)


def test_camera_orthonormalizes_basis():
    cam = Camera(position=Vec3(0.0, 0.0, 0.0), forward=Vec3(0.0, 0.0, 2.0), up=Vec3(0.0, 1.0, 1.0))
    assert cam.forward == Vec3(0.0, 0.0, 1.0)
    assert abs(cam.up.y - 1.0) < 1e-12 and abs(cam.up.z) < 1e-12
    assert abs(cam.right.x - 1.0) < 1e-12


@pytest.mark.parametrize("kwargs", [
    dict(near=1.0, far=1.0),
    dict(near=0.0, far=10.0),
    dict(aspect=0.0),
    dict(fov=0.0),
    dict(up=Vec3(0.0, 0.0, 1.0)),
    dict(forward=Vec3(0.0, 0.0, 0.0)),
])
def test_camera_rejects_bad_parameters(kwargs):
    with pytest.raises(DegenerateMatrixError):
        Camera(position=Vec3(0.0, 0.0, 0.0), **kwargs)


def test_camera_helpers():
    cam = Camera.from_yaw_pitch(Vec3(1.0, 2.0, 3.0), 0.0, 0.0)
    assert cam.forward == Vec3(0.0, 0.0, 1.0)
    turned = Camera.from_yaw_pitch(Vec3(0.0, 0.0, 0.0), math.pi / 2.0, 0.0)
    assert abs(turned.forward.x - 1.0) < 1e-12 and abs(turned.forward.z) < 1e-12
    moved = cam.moved(Vec3(0.0, 0.0, 1.0))
    assert moved.position == Vec3(1.0, 2.0, 4.0)
    assert cam.position == Vec3(1.0, 2.0, 3.0)

    looking = Camera.looking_at(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 0.0))
    expected = look_at(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    assert looking.view_matrix() == expected
