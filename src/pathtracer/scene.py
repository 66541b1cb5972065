# scene.py
"""
Scene descriptions.

A scene file is YAML with a ``materials`` mapping and an ``objects`` list::

    materials:
      Ground: {Diffuse: {albedo: [0.5, 0.5, 0.5]}}
      Gold:   {Metal: {albedo: [0.8, 0.6, 0.2], fuziness: 0.1}}
      Glass:  {Dielectric: {refractive_index: 1.5}}
    objects:
      - object_id: ground
        geometry: {Sphere: {center: [0, -1000, 0], radius: 1000}}
        material: Ground

Optional ``camera`` and ``render`` sections carry CameraSettings and
RenderSettings. Objects may name any material in the file, or "Default".
"""
import logging
import random
from pathlib import Path
from typing import Any, Mapping, NamedTuple

import yaml

from pathtracer.config import CameraSettings, RenderSettings
from pathtracer.core.vector import Vector3
from pathtracer.errors import MaterialNotFoundError, SceneFormatError
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import World
from pathtracer.materials import Dielectric, Diffuse, Material, MaterialAtlas, Metal

logger = logging.getLogger(__name__)


class Scene(NamedTuple):
    atlas: MaterialAtlas
    world: World
    camera: CameraSettings
    render: RenderSettings


def _vector(value: Any, what: str) -> Vector3:
    try:
        x, y, z = value
        return Vector3(float(x), float(y), float(z))
    except (TypeError, ValueError) as exc:
        raise SceneFormatError(f"{what}: expected three numbers, got {value!r}") from exc


def _number(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SceneFormatError(f"{what}: expected a number, got {value!r}") from exc


def _single_variant(entry: Any, what: str):
    """Unpack ``{Variant: {params}}`` into (Variant, params)."""
    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise SceneFormatError(f"{what}: expected a single-key mapping, got {entry!r}")
    (kind, params), = entry.items()
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise SceneFormatError(f"{what}: parameters of {kind} must be a mapping")
    return kind, params


def material_from_dict(name: str, entry: Any) -> Material:
    kind, params = _single_variant(entry, f"material {name}")
    try:
        if kind == "Diffuse":
            return Diffuse(_vector(params["albedo"], f"{name}.albedo"))
        if kind == "Metal":
            # "fuziness" is the spelling used by existing scene files
            fuzz = params.get("fuziness", params.get("fuzz", 0.0))
            return Metal(_vector(params["albedo"], f"{name}.albedo"), _number(fuzz, f"{name}.fuziness"))
        if kind == "Dielectric":
            return Dielectric(_number(params["refractive_index"], f"{name}.refractive_index"))
    except KeyError as exc:
        raise SceneFormatError(f"material {name}: missing parameter {exc.args[0]}") from exc
    raise SceneFormatError(f"material {name}: unknown material type {kind}")


def scene_from_dict(data: Mapping[str, Any], rng=random) -> Scene:
    """
    Resolve a parsed scene description into materials and a BVH-backed world.

    Raises:
        SceneFormatError: the description is malformed.
        MaterialNotFoundError: an object names a material that does not exist.
        EmptySceneError: there are no objects.
    """
    if not isinstance(data, Mapping):
        raise SceneFormatError("scene must be a mapping")

    atlas = MaterialAtlas()
    for name, entry in (data.get("materials") or {}).items():
        atlas.insert_material(str(name), material_from_dict(name, entry))

    builder = World.builder()
    for index, obj in enumerate(data.get("objects") or []):
        if not isinstance(obj, Mapping):
            raise SceneFormatError(f"object #{index}: expected a mapping")
        object_id = obj.get("object_id", f"#{index}")
        material_name = obj.get("material")
        if material_name is None:
            raise SceneFormatError(f"object {object_id}: missing material")
        material = atlas.get_material(str(material_name))
        if material is None:
            raise MaterialNotFoundError(str(material_name))

        kind, params = _single_variant(obj.get("geometry"), f"object {object_id} geometry")
        if kind != "Sphere":
            raise SceneFormatError(f"object {object_id}: unknown geometry {kind}")
        try:
            center = _vector(params["center"], f"{object_id}.center")
            radius = _number(params["radius"], f"{object_id}.radius")
        except KeyError as exc:
            raise SceneFormatError(f"object {object_id}: missing parameter {exc.args[0]}") from exc
        builder.add_object(Sphere(center, radius, material))

    world = builder.build(rng=rng)
    logger.info("Loaded scene: %d materials, %d objects", len(atlas), len(builder.objects))
    return Scene(
        atlas,
        world,
        CameraSettings.from_dict(data.get("camera")),
        RenderSettings.from_dict(data.get("render")),
    )


def load_scene(path, rng=random) -> Scene:
    path = Path(path)
    logger.info("Loading scene file %s", path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise SceneFormatError(f"{path}: {exc}") from exc
    return scene_from_dict(data or {}, rng=rng)


def demo_scene(rng=random, grid: int = 3) -> Scene:
    """
    Ground plane, three large feature spheres and a grid of small random
    ones, in the classic "one weekend" layout.
    """
    atlas = MaterialAtlas()
    atlas.insert_material("Ground", Diffuse(Vector3(0.5, 0.5, 0.5)))
    atlas.insert_material("Glass", Dielectric(1.5))
    atlas.insert_material("Brown", Diffuse(Vector3(0.4, 0.2, 0.1)))
    atlas.insert_material("Mirror", Metal(Vector3(0.7, 0.6, 0.5), 0.0))

    builder = World.builder()
    builder.add_object(Sphere(Vector3(0, -1000, 0), 1000, atlas.get_material("Ground")))
    builder.add_object(Sphere(Vector3(0, 1, 0), 1.0, atlas.get_material("Glass")))
    builder.add_object(Sphere(Vector3(-4, 1, 0), 1.0, atlas.get_material("Brown")))
    builder.add_object(Sphere(Vector3(4, 1, 0), 1.0, atlas.get_material("Mirror")))

    for a in range(-grid, grid):
        for b in range(-grid, grid):
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            choose = rng.random()
            name = f"small_{a}_{b}"
            if choose < 0.8:
                color = Vector3(rng.random() * rng.random(),
                                rng.random() * rng.random(),
                                rng.random() * rng.random())
                material = Diffuse(color)
            elif choose < 0.95:
                material = Metal(Vector3(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1)),
                                 rng.uniform(0, 0.5))
            else:
                material = Dielectric(1.5)
            atlas.insert_material(name, material)
            builder.add_object(Sphere(center, 0.2, material))

    camera = CameraSettings(aperture=0.1, focus_distance=10.0)
    return Scene(atlas, builder.build(rng=rng), camera, RenderSettings())
