# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Helpers for building the CLI command line."""

import re

MASK = "******"

_FILTER_SEPARATORS = re.compile(r"[\s,]+")


def escape_for_script(value: str | None) -> str:
    """Quote a value for the CLI launcher script.

    Embedded double quotes are doubled, which both the shell and the batch
    launcher understand, and the result is wrapped in double quotes. Empty
    and missing values become an empty string.
    """
    if not value:
        return ""
    return '"' + value.replace('"', '""') + '"'


def _is_absolute(path: str) -> bool:
    return path.startswith(("/", "\\")) or re.match(r"^[A-Za-z]:[\\/]", path) is not None


def resolve_path(path: str, base: str, separator: str = "/") -> str:
    """Resolve a possibly relative path against a base directory.

    Args:
        path: Absolute path, or path relative to ``base``
        base: Base directory, usually the workspace
        separator: Path separator of the node the path lives on

    Returns:
        Absolute path using ``separator``
    """
    parts = [p for p in re.split(r"[\\/]+", path) if p and p != "."]
    if _is_absolute(path):
        prefix = separator if path[0] in "/\\" else ""
        return prefix + separator.join(parts)

    root = base.rstrip("/\\")
    return separator.join([root] + parts)


def convert_filter_pattern(filter_pattern: str | None) -> str:
    """Convert a user filter into the CLI's comma-separated dataset filter.

    Entries may be separated by newlines, commas or blanks.

    >>> convert_filter_pattern("PROD.*\\nTEST.COBOL")
    'PROD.*,TEST.COBOL'
    """
    if not filter_pattern:
        return ""
    return ",".join(p for p in _FILTER_SEPARATORS.split(filter_pattern) if p)


class ArgumentListBuilder:
    """Ordered command line where some values are masked when displayed."""

    def __init__(self, *args: str):
        self._args: list[str] = []
        self._masked: list[bool] = []
        for arg in args:
            self.add(arg)

    def add(self, *values: str, mask: bool = False) -> "ArgumentListBuilder":
        """Append values; ``mask`` hides them in :meth:`to_masked_string`."""
        for value in values:
            self._args.append(value)
            self._masked.append(mask)
        return self

    def to_list(self) -> list[str]:
        return list(self._args)

    def to_masked_string(self) -> str:
        return " ".join(MASK if masked else arg for arg, masked in zip(self._args, self._masked))

    def __len__(self) -> int:
        return len(self._args)

    def __repr__(self) -> str:
        return f"ArgumentListBuilder({self.to_masked_string()!r})"
