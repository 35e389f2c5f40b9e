from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pictor_core.painter import TextDirection
from pictor_core.picture import PictureInfo
from pictor_core.viewport import CENTER_VIEW_BOX, Centering

from .render_picture import RenderPicture


@dataclass(frozen=True)
class PictureComponent:
    """Immutable description of a picture; owns no paint state itself."""

    picture: PictureInfo | None
    match_text_direction: bool = False
    text_direction: TextDirection | None = None
    allow_drawing_outside_view_box: bool = False
    centering: Centering = CENTER_VIEW_BOX

    def create_render_object(self, on_needs_paint: Callable[[], None] | None = None) -> RenderPicture:
        return RenderPicture(
            picture=self.picture,
            match_text_direction=self.match_text_direction,
            text_direction=self.text_direction,
            allow_drawing_outside_view_box=self.allow_drawing_outside_view_box,
            on_needs_paint=on_needs_paint,
            centering=self.centering,
        )

    def update_render_object(self, render_object: RenderPicture) -> RenderPicture:
        render_object.picture = self.picture
        render_object.match_text_direction = self.match_text_direction
        render_object.text_direction = self.text_direction
        render_object.allow_drawing_outside_view_box = self.allow_drawing_outside_view_box
        render_object.centering = self.centering
        return render_object
