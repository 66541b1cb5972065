from pathtracer.camera.camera import Camera, CameraBuilder, FocusData

__all__ = ["Camera", "CameraBuilder", "FocusData"]
