"""Tests for the scattering materials and the material atlas."""

from __future__ import annotations

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials import DEFAULT_MATERIAL, Dielectric, Diffuse, MaterialAtlas, Metal

UP = Vector3(0.0, 1.0, 0.0)


def hit_at_origin(front_face: bool = True, material=None) -> HitRecord:
    return HitRecord(p=Vector3(0, 0, 0), normal=UP, t=1.0, front_face=front_face, material=material)


def assert_vec(actual: Vector3, expected: Vector3, abs: float = 1e-9) -> None:
    assert actual.x == pytest.approx(expected.x, abs=abs)
    assert actual.y == pytest.approx(expected.y, abs=abs)
    assert actual.z == pytest.approx(expected.z, abs=abs)


# ===================================================================
# DIFFUSE
# ===================================================================


class TestDiffuse:
    def test_default_albedo_is_mid_grey(self) -> None:
        assert Diffuse().albedo() == Vector3(0.5, 0.5, 0.5)

    def test_scatters_into_upper_hemisphere(self, rng: random.Random) -> None:
        material = Diffuse(Vector3(0.2, 0.4, 0.6))
        rec = hit_at_origin()
        incoming = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(200):
            scattered = material.scatter(incoming, rec, rng)
            assert scattered is not None
            assert scattered.origin == rec.p
            assert scattered.direction.dot(UP) >= 0.0

    def test_never_absorbs(self, rng: random.Random) -> None:
        material = Diffuse()
        rec = hit_at_origin()
        incoming = Ray(Vector3(1, 1, 0), Vector3(-1, -1, 0))
        assert all(material.scatter(incoming, rec, rng) is not None for _ in range(50))


# ===================================================================
# METAL
# ===================================================================


class TestMetal:
    def test_perfect_mirror_reflects_about_normal(self) -> None:
        material = Metal(Vector3(0.9, 0.9, 0.9), 0.0)
        incoming = Ray(Vector3(-1, 1, 0), Vector3(1, -1, 0))

        scattered = material.scatter(incoming, hit_at_origin(), random.Random(0))

        expected = Vector3(1, 1, 0).normalize()
        assert_vec(scattered.direction, expected)

    def test_head_on_reflection(self) -> None:
        material = Metal(Vector3(1, 1, 1))
        scattered = material.scatter(Ray(Vector3(0, 1, 0), Vector3(0, -1, 0)),
                                     hit_at_origin(), random.Random(0))
        assert_vec(scattered.direction, UP)

    def test_absorbs_when_reflection_leaves_below_surface(self) -> None:
        # A ray travelling along the normal reflects straight back into the surface
        material = Metal(Vector3(1, 1, 1))
        scattered = material.scatter(Ray(Vector3(0, -1, 0), Vector3(0, 1, 0)),
                                     hit_at_origin(), random.Random(0))
        assert scattered is None

    def test_fuzz_is_clamped(self) -> None:
        assert Metal(Vector3(1, 1, 1), 3.0).fuzz == 1.0
        assert Metal(Vector3(1, 1, 1), -0.5).fuzz == 0.0

    def test_fuzzy_reflections_stay_near_mirror_direction(self, rng: random.Random) -> None:
        material = Metal(Vector3(1, 1, 1), 0.3)
        incoming = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(100):
            scattered = material.scatter(incoming, hit_at_origin(), rng)
            if scattered is None:
                continue
            offset = scattered.direction - UP
            assert offset.length() < 0.3 + 1e-9


# ===================================================================
# DIELECTRIC
# ===================================================================


class TestDielectric:
    def test_index_matched_passes_straight_through(self, rng: random.Random) -> None:
        material = Dielectric(1.0)
        direction = Vector3(0.3, -1.0, 0.2).normalize()
        for front_face in (True, False):
            rec = hit_at_origin(front_face)
            for _ in range(50):
                scattered = material.scatter(Ray(Vector3(0, 1, 0), direction), rec, rng)
                assert_vec(scattered.direction, direction, abs=1e-9)

    def test_total_internal_reflection(self, rng: random.Random) -> None:
        material = Dielectric(1.5)
        # Leaving the glass at a grazing angle: 1.5 * sin(80 deg) > 1
        angle = math.radians(80)
        direction = Vector3(math.sin(angle), -math.cos(angle), 0)
        rec = hit_at_origin(front_face=False)
        for _ in range(20):
            scattered = material.scatter(Ray(Vector3(0, 1, 0), direction), rec, rng)
            assert_vec(scattered.direction, Vector3(math.sin(angle), math.cos(angle), 0))

    def test_head_on_mostly_transmits(self) -> None:
        material = Dielectric(1.5)
        rng = random.Random(42)
        incoming = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        transmitted = sum(
            material.scatter(incoming, hit_at_origin(), rng).direction.y < 0
            for _ in range(1000)
        )
        # Schlick reflectance at normal incidence is 4%
        assert 900 < transmitted < 1000

    def test_albedo_is_white(self) -> None:
        assert Dielectric(1.5).albedo() == Vector3(1, 1, 1)


# ===================================================================
# ATLAS
# ===================================================================


class TestMaterialAtlas:
    def test_new_atlas_has_default(self) -> None:
        atlas = MaterialAtlas()
        assert DEFAULT_MATERIAL in atlas
        assert isinstance(atlas.get_material("Default"), Diffuse)
        assert len(atlas) == 1

    def test_insert_returns_previous(self) -> None:
        atlas = MaterialAtlas()
        first = Metal(Vector3(1, 1, 1))
        second = Dielectric(1.5)
        assert atlas.insert_material("Shiny", first) is None
        assert atlas.insert_material("Shiny", second) is first
        assert atlas.get_material("Shiny") is second
        assert sorted(atlas) == ["Default", "Shiny"]

    def test_missing_material(self) -> None:
        assert MaterialAtlas().get_material("Nope") is None
