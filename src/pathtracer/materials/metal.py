# materials/metal.py
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Metal(Material):
    """
    Metal material with reflective properties. ``fuzz`` is clamped to [0, 1].
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self._albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> Optional[Ray]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        direction = reflected + random_in_unit_sphere(rng or random) * self.fuzz

        if direction.dot(rec.normal) > 0:
            return Ray(rec.p, direction)

        return None  # Absorb the ray if it does not scatter forward

    def albedo(self) -> Vector3:
        return self._albedo

    def __repr__(self) -> str:
        return f"Metal({self._albedo!r}, fuzz={self.fuzz})"
