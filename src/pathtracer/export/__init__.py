from pathtracer.export.writers import save_canvas, to_pil_image, to_rgba_bytes, write_image, write_ppm

__all__ = ["save_canvas", "to_pil_image", "to_rgba_bytes", "write_image", "write_ppm"]
