# pacman_helper/modules/query.py
"""
query.py - the two dependency queries as exposed to the command line.

A PackageQuery wraps one snapshot of the database. Absence is reported
through QueryResult.status, never as an exception.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from pacman_helper.modules import database as _database
from pacman_helper.modules import relations as _relations
from pacman_helper.modules.desc import Package


class QueryStatus(str, Enum):
    FOUND = "found"
    TARGET_NOT_FOUND = "target_not_found"
    NO_RESULT = "no_result"


class QueryResult:
    def __init__(self, status: QueryStatus, package: str, items: Optional[Iterable[str]] = None):
        self.status = status
        self.package = package
        self.items: List[str] = sorted(items) if items else []

    @property
    def found(self) -> bool:
        return self.status == QueryStatus.FOUND

    @property
    def message(self) -> str:
        if self.status == QueryStatus.TARGET_NOT_FOUND:
            return f"Package '{self.package}' is not installed"
        if self.status == QueryStatus.NO_RESULT:
            return f"Nothing found for '{self.package}'"
        return ""

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"QueryResult(status={self.status.value!r}, package={self.package!r}, items={self.items!r})"


class PackageQuery:
    def __init__(self, packages: Iterable[Package]):
        self.packages = tuple(packages)

    @classmethod
    def from_database(cls, path: Optional[str] = None, descriptor: Optional[str] = None, cfg=None) -> "PackageQuery":
        """Load a fresh snapshot; DatabaseReadError propagates."""
        db = _database.LocalDatabase(path=path, descriptor=descriptor, cfg=cfg)
        return cls(db.load())

    def package(self, name: str) -> Optional[Package]:
        return _relations.find_package(name, self.packages)

    def _result(self, name: str, items) -> QueryResult:
        if items is not None:
            return QueryResult(QueryStatus.FOUND, name, items)
        if self.package(name) is None:
            return QueryResult(QueryStatus.TARGET_NOT_FOUND, name)
        return QueryResult(QueryStatus.NO_RESULT, name)

    def unique_dependencies(self, name: str) -> QueryResult:
        """Dependencies of `name` that no other installed package needs."""
        return self._result(name, _relations.unique_dependencies(name, self.packages))

    def packages_with_same_dependencies(self, name: str) -> QueryResult:
        """Installed packages sharing at least one dependency with `name`."""
        return self._result(name, _relations.packages_sharing_dependencies(name, self.packages))
