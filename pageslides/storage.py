"""Slide storage collaborators.

The extraction core never touches storage; :func:`pageslides.query.extract_and_save`
hands successful results to any object satisfying :class:`SlideStore`.

Usage::

    from pageslides.storage import JsonSlideStore

    store = JsonSlideStore("out/slides.json")
    store.save_slides(result.slides)
    slides = store.load_slides()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from pageslides.items import Slide

logger = logging.getLogger(__name__)


@runtime_checkable
class SlideStore(Protocol):
    """Anything that can persist an ordered list of slides."""

    def save_slides(self, slides: list[Slide]) -> None:
        ...


def _write_json(path: Path, data: dict | list) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class JsonSlideStore:
    """Store slides as a JSON array of camelCase slide objects at *path*."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save_slides(self, slides: list[Slide]) -> None:
        _write_json(self.path, [s.to_dict() for s in slides])
        logger.info("Saved %d slides to %s", len(slides), self.path)

    def load_slides(self) -> list[Slide]:
        """Read slides back; a missing file yields an empty list.

        Entries that fail validation are logged and skipped.
        """
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a JSON array of slides", self.path)
            return []
        slides: list[Slide] = []
        for entry in data:
            try:
                slides.append(Slide.from_dict(entry))
            except ValidationError as exc:
                logger.warning("Skipping invalid slide in %s: %s", self.path, exc)
        return slides


class MemorySlideStore:
    """Keeps the last saved slides in memory."""

    def __init__(self) -> None:
        self.slides: list[Slide] = []
        self.save_count = 0

    def save_slides(self, slides: list[Slide]) -> None:
        self.slides = list(slides)
        self.save_count += 1

    def load_slides(self) -> list[Slide]:
        return list(self.slides)
