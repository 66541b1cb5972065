from pathtracer.materials.atlas import DEFAULT_MATERIAL, MaterialAtlas
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal

__all__ = [
    "DEFAULT_MATERIAL",
    "Dielectric",
    "Diffuse",
    "Material",
    "MaterialAtlas",
    "Metal",
]
