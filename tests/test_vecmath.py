import math

from softraster.transforms import translate
from softraster.vecmath import Mat4, Vec2, Vec3, Vec4, transform, vec3_to_vec4


def test_vec3_arithmetic():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-2.0, 0.5, 4.0)
    assert a + b == Vec3(-1.0, 2.5, 7.0)
    assert a - b == Vec3(3.0, 1.5, -1.0)
    assert a * 2.0 == Vec3(2.0, 4.0, 6.0)
    assert -a == Vec3(-1.0, -2.0, -3.0)
    assert a.dot(b) == -2.0 + 1.0 + 12.0


def test_cross_follows_right_hand_rule():
    x = Vec3(1.0, 0.0, 0.0)
    y = Vec3(0.0, 1.0, 0.0)
    assert x.cross(y) == Vec3(0.0, 0.0, 1.0)
    assert y.cross(x) == Vec3(0.0, 0.0, -1.0)
    assert Vec2(1.0, 0.0).cross(Vec2(0.0, 1.0)) == 1.0


def test_normalize_unit_length():
    n = Vec3(3.0, 4.0, 12.0).normalize()
    assert abs(n.norm() - 1.0) < 1e-12
    assert abs(n.x - 3.0 / 13.0) < 1e-12


def test_normalize_zero_vector_is_explicit_zero():
    n = Vec3(0.0, 0.0, 0.0).normalize()
    assert n == Vec3(0.0, 0.0, 0.0)
    assert n.is_zero()
    assert not any(math.isnan(c) for c in (n.x, n.y, n.z))


def test_identity_is_neutral():
    m = Mat4([[1.0, 2.0, 3.0, 4.0],
              [5.0, 6.0, 7.0, 8.0],
              [9.0, 10.0, 11.0, 12.0],
              [13.0, 14.0, 15.0, 16.0]])
    assert Mat4.identity() @ m == m
    assert m @ Mat4.identity() == m
    assert m @ m != m


def test_transform_is_column_vector_convention():
    t = translate(1.0, 2.0, 3.0)
    p = transform(vec3_to_vec4(Vec3(1.0, 1.0, 1.0)), t)
    assert p == Vec4(2.0, 3.0, 4.0, 1.0)
    # directions (w=0) ignore translation
    d = transform(Vec4(1.0, 1.0, 1.0, 0.0), t)
    assert d == Vec4(1.0, 1.0, 1.0, 0.0)


def test_matmul_applies_right_operand_first():
    # translate then double: (1,0,0) -> (2,0,0) -> (4,0,0)
    s = Mat4.identity()
    for i in range(3):
        s.m[i][i] = 2.0
    t = translate(1.0, 0.0, 0.0)
    assert (s @ t).mul_point(Vec3(1.0, 0.0, 0.0)) == Vec3(4.0, 0.0, 0.0)
    assert (t @ s).mul_point(Vec3(1.0, 0.0, 0.0)) == Vec3(3.0, 0.0, 0.0)
