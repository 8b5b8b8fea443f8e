# File: src/revit_fbx_exporter/naming.py
"""Output filename helpers."""

import re
from typing import Optional

FBX_EXTENSION = ".fbx"

# Revit names the default 3D view "{3D}"; braces become underscores
_BRACES = re.compile(r"[{}]")

# Characters no path component may contain on Windows, plus ASCII controls
_INVALID_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_view_name(name: str) -> str:
    """Make a view name safe to use as a file name.

    Braces are mapped to ``_`` and invalid path characters are removed.
    Applying it twice gives the same result as applying it once.
    """
    return _INVALID_CHARS.sub("", _BRACES.sub("_", name))


def fbx_filename(name: str, fallback: Optional[str] = None) -> str:
    """Return ``<sanitized name>.fbx``.

    Args:
        name: View display name
        fallback: Used instead when the name sanitizes to nothing (typically
            the view id)
    """
    safe = sanitize_view_name(name).strip()
    if not safe and fallback:
        safe = sanitize_view_name(fallback).strip()
    if not safe:
        raise ValueError(f"Cannot derive a file name from view name {name!r}")
    return safe + FBX_EXTENSION
