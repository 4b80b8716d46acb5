"""
Targeted field extraction from JSON manifests.

SDK runtime configs and dependency manifests are external formats; only a
couple of values are needed from each, so they are located by literal
substring search instead of full JSON parsing.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from fxresolver.data import DEPS_TFM_PREFIX

__all__ = ["read_manifest", "extract_field", "extract_deps_framework_version"]

logger = logging.getLogger(__name__)


def read_manifest(path: str) -> Optional[str]:
    """Return the manifest text, or None if it does not exist or cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        logger.debug("No manifest at %s: %s", path, exc)
        return None


def _value_after(text: str, marker: str) -> Optional[str]:
    """Text between the first (case-insensitive) `marker` and the next double quote."""
    m = re.search(re.escape(marker), text, re.IGNORECASE)
    if not m:
        return None
    end = text.find('"', m.end())
    if end == -1:
        return None
    return text[m.end():end]


def extract_field(text: str, field: str) -> Optional[str]:
    """
    Value of the first `"<field>": "<value>"` pair in `text`.

    >>> extract_field('{"tfm": "net5.0"}', "tfm")
    'net5.0'
    """
    return _value_after(text, f'"{field}": "')


def extract_deps_framework_version(text: str) -> Optional[str]:
    """
    Version suffix of the first `.NETCoreApp,Version=v<x>` dependency name
    in a .deps.json, e.g. "3.1" or "6.0".
    """
    value = _value_after(text, f'"name": "{DEPS_TFM_PREFIX}')
    return value or None
