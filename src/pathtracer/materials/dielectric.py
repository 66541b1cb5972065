# materials/dielectric.py
import math
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract, schlick
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material

# Glass doesn't absorb light
_WHITE = Vector3(1.0, 1.0, 1.0)


class Dielectric(Material):
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> Optional[Ray]:
        rng = rng or random

        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection
        if ni_over_nt * sin_theta > 1.0:
            return Ray(rec.p, reflect(unit_direction, rec.normal))

        # An index-matched boundary reflects nothing.
        if ni_over_nt != 1.0 and rng.random() < schlick(cos_theta, ni_over_nt):
            return Ray(rec.p, reflect(unit_direction, rec.normal))

        return Ray(rec.p, refract(unit_direction, rec.normal, ni_over_nt))

    def albedo(self) -> Vector3:
        return _WHITE

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
