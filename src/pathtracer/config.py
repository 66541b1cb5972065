# config.py
"""
Render and camera settings.

Both can be read from the ``render`` / ``camera`` sections of a scene file
and then overridden field by field from the command line.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Tuple

from pathtracer.camera.camera import Camera, FocusData
from pathtracer.core.vector import Vector3
from pathtracer.errors import InvalidSettingError, SceneFormatError
from pathtracer.renderer.renderer import Renderer

Triple = Tuple[float, float, float]


def _integer(value: Any) -> int:
    """int(), but refusing to truncate 3.7 to 3 or to read true as 1."""
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, str):
        return int(value)
    number = int(value)
    if number != value:
        raise ValueError(f"{value!r} is not a whole number")
    return number


def _coerce(cls, name: str, value: Any, kind) -> Any:
    try:
        if kind == "triple":
            x, y, z = value
            return (float(x), float(y), float(z))
        if kind == "int":
            return _integer(value)
        if kind == "optional_int":
            return None if value is None else _integer(value)
        if kind == "optional_float":
            return None if value is None else float(value)
        return kind(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise SceneFormatError(f"{cls.__name__}.{name}: invalid value {value!r}") from exc


class _Settings:
    # field name -> coercion kind
    _kinds: Mapping[str, Any] = {}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]):
        """Build from a mapping, ignoring keys that are not settings."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise SceneFormatError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        values = {k: _coerce(cls, k, v, cls._kinds[k]) for k, v in data.items() if k in known}
        return cls(**values)

    def merged(self, **overrides):
        """Copy with every non-None override applied."""
        values = {k: _coerce(type(self), k, v, self._kinds[k])
                  for k, v in overrides.items() if v is not None}
        return replace(self, **values)


@dataclass(frozen=True)
class RenderSettings(_Settings):
    width: int = 960
    height: int = 540
    samples: int = 100
    bounces: int = 2
    workers: Optional[int] = None   # None: one per CPU
    seed: Optional[int] = None

    _kinds = {
        "width": "int",
        "height": "int",
        "samples": "int",
        "bounces": "int",
        "workers": "optional_int",
        "seed": "optional_int",
    }

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            raise InvalidSettingError(f"height must be positive, got {self.height}")
        return self.width / self.height

    def configure(self, renderer: Renderer) -> Renderer:
        renderer.width(self.width).height(self.height).samples(self.samples).bounces(self.bounces)
        if self.workers is not None:
            renderer.workers(self.workers)
        return renderer.seed(self.seed)


@dataclass(frozen=True)
class CameraSettings(_Settings):
    look_from: Triple = (13.0, 2.0, 3.0)
    look_at: Triple = (0.0, 0.0, 0.0)
    v_up: Triple = (0.0, 1.0, 0.0)
    vertical_fov: float = 20.0
    aperture: Optional[float] = None
    focus_distance: Optional[float] = None

    _kinds = {
        "look_from": "triple",
        "look_at": "triple",
        "v_up": "triple",
        "vertical_fov": float,
        "aperture": "optional_float",
        "focus_distance": "optional_float",
    }

    def build(self, aspect_ratio: float) -> Camera:
        """
        Camera for these settings. An aperture without a focus distance
        focuses on the look-at point.
        """
        look_from = Vector3(*self.look_from)
        look_at = Vector3(*self.look_at)
        builder = (Camera.builder()
                   .set_origin(look_from)
                   .set_look_at(look_at)
                   .set_v_up(Vector3(*self.v_up))
                   .set_vertical_fov(self.vertical_fov)
                   .set_aspect_ratio(aspect_ratio))
        if self.aperture is not None:
            focus_distance = self.focus_distance
            if focus_distance is None:
                focus_distance = (look_from - look_at).length()
            builder.set_focus(FocusData(self.aperture, focus_distance))
        return builder.build()
