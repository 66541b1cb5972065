# materials/diffuse.py
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Diffuse(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3 = None):
        self._albedo = albedo if albedo is not None else Vector3(0.5, 0.5, 0.5)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> Optional[Ray]:
        """
        Scatter a ray according to a Lambertian reflection model.
        """
        # Pick a random scatter direction by adding a random vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng or random)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction)

    def albedo(self) -> Vector3:
        return self._albedo

    def __repr__(self) -> str:
        return f"Diffuse({self._albedo!r})"
