"""Package name normalization for JUnit classnames and suite names."""

from __future__ import annotations

import posixpath


def _join(*elems: str) -> str:
    """Join path elements like Go's ``path.Join``: skip empties, then clean."""
    parts = [e for e in elems if e]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    # POSIX keeps exactly two leading slashes; path.Clean does not.
    if cleaned.startswith("//"):
        cleaned = cleaned[1:]
    return cleaned


def strip_path_elements(name: str, strip: int) -> str:
    """Drop the first ``strip`` slash-separated segments of ``name``.

    Stripping more segments than exist yields ``""`` rather than an error.
    """
    if strip <= 0:
        return name
    elems = name.split("/")
    if strip > len(elems):
        return ""
    return _join(*elems[strip:])


def munge_package_name(name: str, strip: int = 0, prefix: str = "") -> str:
    """Convert a Go import path into a dot-separated JUnit name.

    JUnit assumes Java style package names and Jenkins renders the dots as
    a hierarchy, so ``github.com/foo/bar`` would show up as ``github`` →
    ``com/foo/bar``. Dots are replaced with ``-`` (never valid in a Go
    package name) before slashes become dots, giving
    ``github-com.foo.bar``. The conversion is one-way.
    """
    name = strip_path_elements(name, strip)
    name = _join(prefix, name)
    name = name.replace(".", "-")
    return name.replace("/", ".")
