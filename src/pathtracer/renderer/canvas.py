# renderer/canvas.py
from typing import Iterator, Tuple

import numpy as np

from pathtracer.core.vector import Vector3


class Canvas:
    """
    Float RGB accumulation buffer of shape (height, width, 3).

    ``layers`` counts how many rendered samples have been summed into the
    buffer; ``normalize`` divides them back into an average. Row 0 is the top
    of the image.
    """
    def __init__(self, height: int, width: int, data: np.ndarray = None, layers: int = 0):
        self.height = height
        self.width = width
        self.data = data if data is not None else np.zeros((height, width, 3), dtype=np.float32)
        self.layers = layers

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.data.shape

    def set_pixel(self, i: int, j: int, color: Vector3):
        """Write ``color`` at column ``i``, row ``j``."""
        if self.layers == 0:
            self.layers = 1
        self.data[j, i, 0] = color.x
        self.data[j, i, 1] = color.y
        self.data[j, i, 2] = color.z

    def get_pixel(self, i: int, j: int) -> Vector3:
        r, g, b = self.data[j, i]
        return Vector3(float(r), float(g), float(b))

    def normalize(self):
        """Average the accumulated layers. A no-op once layers is 1."""
        if self.layers > 1:
            self.data /= self.layers
            self.layers = 1

    def gamma_correction(self):
        """Gamma 2 encoding. Not idempotent: apply exactly once per image."""
        np.sqrt(self.data, out=self.data)

    def copy(self) -> "Canvas":
        return Canvas(self.height, self.width, self.data.copy(), self.layers)

    def _check_compatible(self, other: "Canvas"):
        if not isinstance(other, Canvas):
            raise TypeError(f"Cannot combine Canvas with {type(other).__name__}")
        if self.data.shape != other.data.shape:
            raise ValueError(f"Canvas shape mismatch: {self.data.shape} vs {other.data.shape}")

    def __add__(self, other: "Canvas") -> "Canvas":
        self._check_compatible(other)
        return Canvas(self.height, self.width, self.data + other.data, self.layers + other.layers)

    def __iadd__(self, other: "Canvas") -> "Canvas":
        self._check_compatible(other)
        self.data += other.data
        self.layers += other.layers
        return self

    def to_rgb_bytes_array(self) -> np.ndarray:
        """8-bit (height, width, 3) array, each channel ``int(256 * clamp(x, 0, 0.999))``."""
        return (256.0 * np.clip(self.data, 0.0, 0.999)).astype(np.uint8)

    def pixels(self) -> Iterator[Tuple[int, int, int]]:
        """8-bit RGB triples in row-major order, top row first."""
        for r, g, b in self.to_rgb_bytes_array().reshape(-1, 3):
            yield int(r), int(g), int(b)

    def __repr__(self) -> str:
        return f"Canvas(height={self.height}, width={self.width}, layers={self.layers})"
