"""Back-office path helpers.

Resolves application-relative paths (``~/...``) against the virtual root the
service is mounted under, and derives the MVC area name reserved for the
back office from the configured back-office path.
"""

from __future__ import annotations


def resolve_url(path: str, root: str = "/") -> str:
    """Resolve a ``~/`` path against `root`; other paths are returned as-is."""
    if path.startswith("~/"):
        return (root or "/").rstrip("/") + path[1:]
    if path == "~":
        return (root or "/").rstrip("/") + "/"
    return path


def get_mvc_area(path: str | None, root: str = "/") -> str:
    """Return the area name for the back-office `path`.

    ``("~/umbraco", "/")`` gives ``"umbraco"`` and
    ``("~/some-wacky/nestedPath", "/MyVirtualDir")`` gives
    ``"some-wacky-nestedpath"``.
    """
    if not path:
        return ""
    resolved = resolve_url(path, root)
    root = root or "/"
    if resolved.startswith(root):
        resolved = resolved[len(root):]
    return resolved.lstrip("~").lstrip("/").replace("/", "-").strip().lower()


__all__ = ["resolve_url", "get_mvc_area"]
