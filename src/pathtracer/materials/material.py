# materials/material.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter() and albedo().

    Materials are immutable once constructed and are shared between every
    primitive using them and the MaterialAtlas that names them.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> Optional[Ray]:
        """
        Computes the scattered ray, or None if the ray is absorbed.
        ``rng`` is a random source exposing ``random()`` and ``uniform()``.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def albedo(self) -> Vector3:
        """
        The attenuation applied to light arriving along the scattered ray.
        """
        raise NotImplementedError("albedo() must be implemented by subclasses.")
