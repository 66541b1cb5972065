"""Tests for Vector3, Ray and the sampling helpers."""

from __future__ import annotations

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.utils import (
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    refract,
    schlick,
)
from pathtracer.core.vector import Vector3


# ===================================================================
# VECTOR3
# ===================================================================


class TestVector3:
    def test_arithmetic(self) -> None:
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert -a == Vector3(-1, -2, -3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)
        assert a * b == Vector3(4, 10, 18)
        assert b / 2 == Vector3(2, 2.5, 3)

    def test_dot_cross(self) -> None:
        x = Vector3(1, 0, 0)
        y = Vector3(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y) == Vector3(0, 0, 1)
        assert y.cross(x) == Vector3(0, 0, -1)

    def test_normalize(self) -> None:
        v = Vector3(3, 0, 4).normalize()
        assert v.length() == pytest.approx(1.0)
        assert Vector3(0, 0, 0).normalize() == Vector3(0, 0, 0)

    def test_indexing(self) -> None:
        v = Vector3(7, 8, 9)
        assert [v[0], v[1], v[2]] == [7, 8, 9]
        assert list(v) == [7, 8, 9]
        with pytest.raises(IndexError):
            v[3]

    def test_lerp_endpoints(self) -> None:
        a = Vector3(1, 1, 1)
        b = Vector3(0.5, 0.7, 1.0)
        assert Vector3.lerp(a, b, 0.0) == a
        mid = Vector3.lerp(a, b, 0.5)
        assert mid.x == pytest.approx(0.75)
        assert mid.y == pytest.approx(0.85)

    def test_near_zero(self) -> None:
        assert Vector3(1e-9, -1e-9, 0).near_zero()
        assert not Vector3(1e-3, 0, 0).near_zero()

    def test_is_unhashable(self) -> None:
        # Components are mutable, so equal vectors must not be dict keys.
        with pytest.raises(TypeError):
            hash(Vector3(1, 2, 3))


# ===================================================================
# RAY
# ===================================================================


class TestRay:
    def test_at(self) -> None:
        r = Ray(Vector3(1, 2, 3), Vector3(0, 0, -2))
        assert r.at(0) == Vector3(1, 2, 3)
        assert r.at(1.5) == Vector3(1, 2, 0)

    def test_is_read_only(self) -> None:
        r = Ray(Vector3(0, 0, 0), Vector3(1, 0, 0))
        with pytest.raises(AttributeError):
            r.origin = Vector3(1, 1, 1)


# ===================================================================
# SAMPLING & OPTICS HELPERS
# ===================================================================


class TestSampling:
    def test_unit_sphere_and_disk_bounds(self, rng: random.Random) -> None:
        for _ in range(200):
            assert random_in_unit_sphere(rng).length_squared() < 1.0
            p = random_in_unit_disk(rng)
            assert p.z == 0
            assert p.length_squared() < 1.0

    def test_unit_vector_length(self, rng: random.Random) -> None:
        for _ in range(200):
            assert random_unit_vector(rng).length() == pytest.approx(1.0)

    def test_seeded_sources_repeat(self) -> None:
        a = [random_unit_vector(random.Random(5)) for _ in range(3)]
        b = [random_unit_vector(random.Random(5)) for _ in range(3)]
        assert a == b


class TestOptics:
    def test_reflect(self) -> None:
        v = Vector3(1, -1, 0)
        n = Vector3(0, 1, 0)
        assert reflect(v, n) == Vector3(1, 1, 0)

    def test_refract_matched_index_keeps_direction(self) -> None:
        uv = Vector3(1, -1, 0).normalize()
        out = refract(uv, Vector3(0, 1, 0), 1.0)
        assert out.x == pytest.approx(uv.x)
        assert out.y == pytest.approx(uv.y)

    def test_schlick(self) -> None:
        # Head-on reflectance of glass is r0 = ((1 - 1.5) / (1 + 1.5))^2
        assert schlick(1.0, 1.5) == pytest.approx(0.04)
        # Grazing incidence reflects everything
        assert schlick(0.0, 1.5) == pytest.approx(1.0)
        assert schlick(1.0, 1.0) == 0.0
        assert schlick(math.cos(1.0), 1.0) > 0.0
