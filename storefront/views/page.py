"""What the chat shows right now."""
from __future__ import annotations

from .base import Screen, build_markup
from .gallery import Gallery
from .header import Header
from .modal import Modal


class Page:
    """Modal content when a modal is open, otherwise the catalog page."""

    def __init__(self, header: Header, gallery: Gallery, modal: Modal) -> None:
        self.header = header
        self.gallery = gallery
        self.modal = modal

    def current(self) -> Screen:
        if self.modal.is_open:
            return self.modal.render()
        header = self.header.render()
        gallery = self.gallery.render()
        return Screen(
            text=f"{gallery.text}\n\n{header.text}",
            markup=build_markup(gallery.rows + header.rows),
        )
