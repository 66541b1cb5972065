# geometry/bvh.py
import random
from typing import List, Optional, Sequence

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.errors import EmptySceneError, MissingBoundingBoxError
from pathtracer.geometry.hittable import Hittable, HitRecord


def _box_of(obj: Hittable) -> AABB:
    box = obj.bounding_box()
    if box is None:
        raise MissingBoundingBoxError(obj)
    return box


class BVHNode(Hittable):
    """
    Bounding volume hierarchy node.

    Each node owns two children (primitives or other nodes) and the box
    enclosing both. Splits happen on an axis drawn uniformly at random per
    node: the objects are ordered by their box minimum on that axis and cut
    at the middle. A node over a single object aliases it as both children.

    Once built the tree is never mutated, so it can be shared by any number
    of render threads.
    """
    __slots__ = ("left", "right", "box")

    def __init__(self, left: Hittable, right: Hittable, box: AABB):
        self.left = left
        self.right = right
        self.box = box

    @classmethod
    def build(cls, objects: Sequence[Hittable], rng=random) -> "BVHNode":
        """
        Build a tree over ``objects``. The input sequence is left untouched.

        Raises:
            EmptySceneError: ``objects`` is empty.
            MissingBoundingBoxError: an object has no bounding box.
        """
        if len(objects) == 0:
            raise EmptySceneError("Cannot build a BVH over an empty object list")
        # Validate every box up front so a bad primitive aborts the whole build.
        for obj in objects:
            _box_of(obj)
        return cls._build(list(objects), 0, len(objects), rng)

    @classmethod
    def _build(cls, objects: List[Hittable], start: int, end: int, rng) -> "BVHNode":
        axis = rng.randint(0, 2)
        object_span = end - start

        def key(obj):
            return _box_of(obj).minimum[axis]

        if object_span == 1:
            left = right = objects[start]
        elif object_span == 2:
            if key(objects[start]) <= key(objects[start + 1]):
                left, right = objects[start], objects[start + 1]
            else:
                left, right = objects[start + 1], objects[start]
        else:
            objects[start:end] = sorted(objects[start:end], key=key)
            mid = start + object_span // 2
            left = cls._build(objects, start, mid, rng)
            right = cls._build(objects, mid, end, rng)

        box = AABB.surrounding_box(_box_of(left), _box_of(right))
        return cls(left, right, box)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)
        # A left hit shortens the search on the right.
        hit_right = self.right.hit(ray, t_min, hit_left.t if hit_left else t_max)

        if hit_left and hit_right:
            return hit_left if hit_left.t <= hit_right.t else hit_right
        return hit_left or hit_right

    def bounding_box(self) -> AABB:
        return self.box

    def depth(self) -> int:
        depths = [child.depth() if isinstance(child, BVHNode) else 0
                  for child in (self.left, self.right)]
        return 1 + max(depths)

    def leaves(self) -> List[Hittable]:
        """Distinct primitives under this node, left to right."""
        out = []
        for child in (self.left, self.right) if self.left is not self.right else (self.left,):
            if isinstance(child, BVHNode):
                out.extend(child.leaves())
            else:
                out.append(child)
        return out

    def __len__(self) -> int:
        return len(self.leaves())
