"""Offline Monte-Carlo path tracer: spheres, a BVH, three materials and a
progressive multi-process renderer."""
from pathtracer.camera import Camera, CameraBuilder, FocusData
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry import BVHNode, HitRecord, Hittable, HittableList, Sphere, World, WorldBuilder
from pathtracer.materials import Dielectric, Diffuse, Material, MaterialAtlas, Metal
from pathtracer.renderer import Canvas, Render, Renderer, RenderPass

__version__ = "0.1.0"

__all__ = [
    "AABB",
    "BVHNode",
    "Camera",
    "CameraBuilder",
    "Canvas",
    "Dielectric",
    "Diffuse",
    "FocusData",
    "HitRecord",
    "Hittable",
    "HittableList",
    "Material",
    "MaterialAtlas",
    "Metal",
    "Ray",
    "Render",
    "RenderPass",
    "Renderer",
    "Sphere",
    "Vector3",
    "World",
    "WorldBuilder",
]
