# camera/camera.py
import math
import random
from typing import NamedTuple, Optional

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Vector3


class FocusData(NamedTuple):
    """Thin-lens parameters: lens diameter and distance to the sharp plane."""
    aperture: float
    focus_distance: float


class Camera:
    """
    Thin-lens camera mapping normalized image coordinates to world rays.

    Immutable after construction; build one with ``Camera.builder()``.
    """
    def __init__(self, origin: Vector3, vertical_fov: float, aspect_ratio: float,
                 look_at: Vector3 = None, v_up: Vector3 = None,
                 focus_data: Optional[FocusData] = None):
        if v_up is None:
            v_up = Vector3(0.0, 1.0, 0.0)
        if look_at is None:
            look_at = Vector3(0.0, 0.0, -1.0)

        # Compute viewport dimensions based on fov (degrees)
        h = math.tan(math.radians(vertical_fov) / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points backwards, u right, v up
        w = (origin - look_at).normalize()
        u = v_up.cross(w).normalize()
        v = w.cross(u)

        # Without lens data the image plane sits one unit in front of the origin
        focus_dist = focus_data.focus_distance if focus_data is not None else 1.0
        self.horizontal = u * (viewport_width * focus_dist)
        self.vertical = v * (viewport_height * focus_dist)
        self.lower_left_corner = (origin -
                                  self.horizontal / 2.0 -
                                  self.vertical / 2.0 -
                                  w * focus_dist)

        self.origin = origin
        self.u = u
        self.v = v
        self.w = w
        self.lens_radius = focus_data.aperture / 2.0 if focus_data is not None else None

    @staticmethod
    def builder() -> "CameraBuilder":
        return CameraBuilder()

    def get_ray_from_coords(self, s: float, t: float, rng=random) -> Ray:
        """
        Ray through the image-plane point at (s, t), both in [0, 1], with
        (0, 0) the lower-left corner. With a lens the origin is jittered over
        the aperture while still aiming at the same focal-plane point.
        """
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        if self.lens_radius is None:
            return Ray(self.origin, target - self.origin)

        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        ray_origin = self.origin + offset
        return Ray(ray_origin, target - ray_origin)


class CameraBuilder:
    def __init__(self):
        self.origin = Vector3(0.0, 0.0, 1.0)
        self.v_up = Vector3(0.0, 1.0, 0.0)
        self.look_at = Vector3(0.0, 0.0, 0.0)
        self.vertical_fov = 40.0
        self.aspect_ratio = 16.0 / 9.0
        self.focus_data: Optional[FocusData] = None

    def set_origin(self, origin: Vector3) -> "CameraBuilder":
        self.origin = origin
        return self

    def set_v_up(self, v_up: Vector3) -> "CameraBuilder":
        self.v_up = v_up
        return self

    def set_look_at(self, look_at: Vector3) -> "CameraBuilder":
        self.look_at = look_at
        return self

    def set_vertical_fov(self, vertical_fov: float) -> "CameraBuilder":
        self.vertical_fov = vertical_fov
        return self

    def set_aspect_ratio(self, aspect_ratio: float) -> "CameraBuilder":
        self.aspect_ratio = aspect_ratio
        return self

    def set_focus(self, focus_data: FocusData) -> "CameraBuilder":
        self.focus_data = focus_data
        return self

    def build(self) -> Camera:
        return Camera(
            self.origin,
            self.vertical_fov,
            self.aspect_ratio,
            look_at=self.look_at,
            v_up=self.v_up,
            focus_data=self.focus_data,
        )
