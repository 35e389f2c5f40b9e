"""Render-tree integration for recorded pictures."""

from .picture_component import PictureComponent
from .render_picture import RenderPicture

__all__ = [
    "PictureComponent",
    "RenderPicture",
]
