from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.hittable_list import HittableList
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World, WorldBuilder

__all__ = [
    "BVHNode",
    "Hittable",
    "HitRecord",
    "HittableList",
    "Sphere",
    "World",
    "WorldBuilder",
]
