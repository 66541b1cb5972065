# materials/atlas.py
from typing import Dict, Iterator, Optional

from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.material import Material

DEFAULT_MATERIAL = "Default"


class MaterialAtlas:
    """
    Name -> Material lookup used while building a scene.

    A fresh atlas already holds a grey diffuse material under "Default".
    The atlas is not consulted during rendering; primitives keep their own
    reference to the material they were given.
    """
    def __init__(self):
        self._atlas: Dict[str, Material] = {DEFAULT_MATERIAL: Diffuse()}

    def insert_material(self, name: str, material: Material) -> Optional[Material]:
        """Store ``material`` under ``name``, returning whatever it replaced."""
        previous = self._atlas.get(name)
        self._atlas[name] = material
        return previous

    def get_material(self, name: str) -> Optional[Material]:
        return self._atlas.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._atlas

    def __iter__(self) -> Iterator[str]:
        return iter(self._atlas)

    def __len__(self) -> int:
        return len(self._atlas)
