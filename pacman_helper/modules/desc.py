# pacman_helper/modules/desc.py
"""
desc.py - parser for the `desc` files of the local pacman database.

A descriptor is a line oriented text made of sections:

    %NAME%
    linux

    %DEPENDS%
    coreutils
    kmod>=30

    %OPTDEPENDS%
    linux-firmware: firmware images needed for some devices

- each section starts at a `%TAG%` marker line;
- it ends at the first blank line or at the next marker;
- unknown tags are skipped, missing tags leave the field empty.

The parser is a best-effort scrape: it never raises on malformed input.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pacman_helper.modules import logger as _logger

NAME = "NAME"
VERSION = "VERSION"
DESC = "DESC"
DEPENDS = "DEPENDS"
OPTDEPENDS = "OPTDEPENDS"
SIZE = "SIZE"

_CONSTRAINT_CHARS = (">", "=")


@dataclass(frozen=True)
class Package:
    """Metadata of one installed package, as declared in its descriptor."""
    name: str = ""
    dependencies: Tuple[str, ...] = ()
    opt_dependencies: Tuple[str, ...] = ()
    version: str = ""
    description: str = ""
    size: Optional[int] = None

    @property
    def is_usable(self) -> bool:
        """A package without a name can't be the target of a lookup."""
        return bool(self.name)


def normalize_dependency(entry: str) -> str:
    """
    Strip a version constraint: `lib>=2.0` -> `lib`.
    The constraint starts at the earliest `>` or `=`.
    """
    entry = entry.strip()
    cut = len(entry)
    for ch in _CONSTRAINT_CHARS:
        idx = entry.find(ch)
        if idx != -1 and idx < cut:
            cut = idx
    return entry[:cut].strip()


def normalize_opt_dependency(entry: str) -> str:
    """Drop the `: reason` annotation of an optional dependency, then its constraint."""
    ident, _, _ = entry.partition(":")
    return normalize_dependency(ident)


def is_marker(line: str) -> bool:
    return len(line) > 2 and line.startswith("%") and line.endswith("%")


def _section_kind(tag: str) -> Optional[str]:
    if tag in (NAME, VERSION, DESC, OPTDEPENDS, SIZE):
        return tag
    # DEPENDS variants share the same handling
    if tag.startswith(DEPENDS):
        return DEPENDS
    return None


def _parse_size(value: str, log: _logger.Logger) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        log.debug(f"Ignoring invalid %SIZE% value: {value!r}")
        return None


def parse(raw_text: str, log: Optional[_logger.Logger] = None) -> Package:
    """
    Build a Package from the full text of one descriptor file.
    `log` receives debug notes about skipped content; defaults to a
    logger built from the shared config.
    Single pass: `section` holds the kind of the section being read,
    or None between sections.
    """
    log = log or _logger.Logger("desc")
    name = ""
    version = ""
    size: Optional[int] = None
    desc_lines: List[str] = []
    depends: List[str] = []
    optdepends: List[str] = []

    section: Optional[str] = None
    # single-value sections only take their first line
    taken = False

    for raw in raw_text.splitlines():
        line = raw.strip()

        if not line:
            section = None
            continue

        if is_marker(line):
            tag = line[1:-1]
            section = _section_kind(tag)
            taken = False
            if section is None:
                log.debug(f"Skipping unknown section %{tag}%")
            continue

        if section is None:
            continue

        if section == DEPENDS:
            dep = normalize_dependency(line)
            if dep:
                depends.append(dep)
        elif section == OPTDEPENDS:
            dep = normalize_opt_dependency(line)
            if dep:
                optdepends.append(dep)
        elif section == DESC:
            desc_lines.append(line)
        elif not taken:
            taken = True
            if section == NAME:
                if not name:
                    name = line
            elif section == VERSION:
                version = line
            elif section == SIZE:
                size = _parse_size(line, log)

    return Package(
        name=name,
        dependencies=tuple(depends),
        opt_dependencies=tuple(optdepends),
        version=version,
        description=" ".join(desc_lines),
        size=size,
    )
