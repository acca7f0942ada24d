"""Extraction policies and YAML-based extraction profiles.

A profile file looks like::

    default:
      dedup_min_words: 3
    sources:
      notion:
        emit_dividers: true
    domains:
      docs.example.com:
        drop_empty_slides: false

Sections are merged in that order on top of :func:`default_policy`; the most
specific matching domain wins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field

from pageslides.items import SourceType
from pageslides.settings import DEDUP_MIN_WORDS


class ExtractionPolicy(BaseModel):
    """Per-source knobs read by the assembler and the extractors."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    emit_dividers: bool = False      # render dividers as "---"
    tight_lists: bool = True         # join consecutive list fragments with "\n"
    drop_empty_slides: bool = True   # drop slides with no body and no subslides
    dedup_min_words: int = Field(default=DEDUP_MIN_WORDS, ge=1)
    base_url: str = ""               # resolves relative image sources


_SOURCE_DEFAULTS: dict[SourceType, dict[str, Any]] = {
    SourceType.NOTION: {"emit_dividers": False},
    SourceType.MARKDOWN: {"emit_dividers": True},
    SourceType.RENDERED_MARKDOWN: {"emit_dividers": True},
    SourceType.RAW_MARKDOWN: {"emit_dividers": True},
}


def default_policy(source_type: SourceType | str | None = None, **overrides: Any) -> ExtractionPolicy:
    """Built-in policy for *source_type*, with keyword *overrides* applied."""
    # SourceType is a str enum, so plain strings hit the same keys
    values: dict[str, Any] = dict(_SOURCE_DEFAULTS.get(source_type, {})) if source_type else {}
    values.update(overrides)
    return ExtractionPolicy(**values)


def _best_domain(domains: dict[str, Any], url: str) -> dict[str, Any]:
    netloc = urlparse(url).netloc.lower()
    best_key = ""
    best_cfg: dict[str, Any] = {}
    for key, cfg in domains.items():
        if not isinstance(key, str) or not isinstance(cfg, dict):
            continue
        key_lower = key.lower()
        if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
            len(key_lower) > len(best_key)
        ):
            best_key = key_lower
            best_cfg = cfg
    return best_cfg


def load_profile(
    path: str | Path,
    url: str = "",
    source_type: SourceType | str | None = None,
) -> ExtractionPolicy:
    """Load YAML profile *path* and return the policy for *url* and *source_type*."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        data = {}
    default = data.get("default") or {}
    sources = data.get("sources") or {}
    domains = data.get("domains") or {}

    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)
    if source_type and isinstance(sources, dict):
        key = source_type.value if isinstance(source_type, SourceType) else str(source_type)
        source_cfg = sources.get(key)
        if isinstance(source_cfg, dict):
            merged.update(source_cfg)
    if url and isinstance(domains, dict):
        merged.update(_best_domain(domains, url))
    if url:
        merged.setdefault("base_url", url)
    return default_policy(source_type, **merged)
