from .manifest_renderer import JinjaManifestRenderer

__all__ = ["JinjaManifestRenderer"]
