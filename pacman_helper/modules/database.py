# pacman_helper/modules/database.py
"""
database.py - reads the local pacman database.

Expected layout (one directory per installed package):

    /var/lib/pacman/local/
        ALPM_DB_VERSION
        linux-6.10.1-1/
            desc
            files
        coreutils-9.5-1/
            desc
            ...

- a package directory without `desc` is skipped;
- a `desc` that exists but can't be read aborts the whole load;
- the collection is rebuilt from disk on every call, nothing is cached.
"""

from __future__ import annotations
import os
from typing import List, Optional

from pacman_helper.modules import desc as _desc
from pacman_helper.modules import logger as _logger
from pacman_helper.modules.config import config as _default_config

DEFAULT_DATABASE_PATH = "/var/lib/pacman/local"
DESCRIPTOR_FILENAME = "desc"


class DatabaseError(Exception):
    pass


class DatabaseReadError(DatabaseError):
    """The database root or a descriptor file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class LocalDatabase:
    def __init__(self,
                 path: Optional[str] = None,
                 descriptor: Optional[str] = None,
                 logger: Optional[_logger.Logger] = None,
                 cfg=None):
        cfg = cfg or _default_config
        self.path = path or cfg.get("database", "path", fallback=DEFAULT_DATABASE_PATH)
        self.descriptor = descriptor or cfg.get("database", "descriptor", fallback=DESCRIPTOR_FILENAME)
        self.log = logger or _logger.Logger("database", cfg=cfg)

    def entries(self) -> List[str]:
        """Package directories under the database root, in enumeration order."""
        try:
            with os.scandir(self.path) as it:
                return [entry.path for entry in it if entry.is_dir()]
        except OSError as e:
            raise DatabaseReadError(self.path, e.strerror or str(e)) from e

    def read_descriptor(self, desc_path: str) -> _desc.Package:
        try:
            # undecodable bytes become U+FFFD instead of aborting the load
            with open(desc_path, "r", encoding="utf-8", errors="replace") as fh:
                content = fh.read()
        except OSError as e:
            raise DatabaseReadError(desc_path, e.strerror or str(e)) from e
        return _desc.parse(content, log=self.log)

    def load(self) -> List[_desc.Package]:
        """
        Parse every package descriptor of the database.
        Raises DatabaseReadError; never returns a partial list.
        """
        packages: List[_desc.Package] = []
        for entry in self.entries():
            desc_path = os.path.join(entry, self.descriptor)
            if not os.path.exists(desc_path):
                self.log.debug(f"No {self.descriptor} in {entry}, skipping")
                continue
            package = self.read_descriptor(desc_path)
            if not package.is_usable:
                self.log.warning(f"{desc_path} has no %NAME% section")
            packages.append(package)
        self.log.debug(f"Loaded {len(packages)} packages from {self.path}")
        return packages


def load_packages(root_path: Optional[str] = None, descriptor: Optional[str] = None) -> List[_desc.Package]:
    return LocalDatabase(path=root_path, descriptor=descriptor).load()
