# geometry/world.py
import logging
import random
from typing import List

from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)


class World:
    """
    A finished scene: the BVH built over every object added to a WorldBuilder.
    """
    def __init__(self, bvh_root: BVHNode):
        self._bvh_root = bvh_root

    @staticmethod
    def builder() -> "WorldBuilder":
        return WorldBuilder()

    @property
    def hittables(self) -> BVHNode:
        """The shared, read-only root of the acceleration structure."""
        return self._bvh_root


class WorldBuilder:
    def __init__(self):
        self.objects: List[Hittable] = []

    def add_object(self, obj: Hittable) -> "WorldBuilder":
        self.objects.append(obj)
        return self

    def build(self, rng=random) -> World:
        root = BVHNode.build(self.objects, rng=rng)
        logger.debug("Built BVH over %d objects (depth %d)", len(self.objects), root.depth())
        return World(root)
