# errors.py
"""Exception hierarchy for scene construction and rendering."""


class PathTracerError(Exception):
    """Base class for all errors raised by the path tracer."""


class SceneError(PathTracerError):
    """The scene could not be built. Raised before any rendering begins."""


class EmptySceneError(SceneError):
    """An acceleration structure was requested over zero primitives."""


class MissingBoundingBoxError(SceneError):
    """A primitive could not report a bounding box."""

    def __init__(self, obj):
        super().__init__(f"No bounding box for {obj!r}")
        self.obj = obj


class MaterialNotFoundError(SceneError):
    def __init__(self, name: str):
        super().__init__(f"Cannot find material {name}")
        self.name = name


class SceneFormatError(SceneError):
    """A scene description is malformed."""


class RenderError(PathTracerError):
    """A render produced no usable pass."""


class RenderCancelled(PathTracerError):
    """The render was stopped before all passes were merged."""


class InvalidSettingError(PathTracerError, ValueError):
    """A render option is out of range or not a whole number."""
