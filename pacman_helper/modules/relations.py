# pacman_helper/modules/relations.py
"""
Dependency relations between installed packages.

Both queries compare the dependencies of a target package against every
other package of a loaded collection. They only read the collection.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Set

from pacman_helper.modules.desc import Package


def find_package(name: str, packages: Iterable[Package]) -> Optional[Package]:
    """First package called `name`; an empty name never matches."""
    if not name:
        return None
    for package in packages:
        if package.name == name:
            return package
    return None


def _others(target_name: str, packages: Iterable[Package]):
    for package in packages:
        if package.name != target_name:
            yield package


def unique_dependencies(target_name: str, packages: Iterable[Package]) -> Optional[List[str]]:
    """
    Dependencies of `target_name` that no other package depends on.

    Returns None when the target is unknown, has no dependencies, shares
    nothing with the other packages, or has nothing left once the shared
    dependencies are removed. Duplicated entries count once.
    """
    packages = list(packages)
    target = find_package(target_name, packages)
    if target is None or not target.dependencies:
        return None

    wanted = set(target.dependencies)
    shared: Set[str] = set()
    for package in _others(target_name, packages):
        shared.update(dep for dep in package.dependencies if dep in wanted)

    if not shared:
        return None

    remaining: List[str] = []
    for dep in target.dependencies:
        if dep not in shared and dep not in remaining:
            remaining.append(dep)
    return remaining or None


def packages_sharing_dependencies(target_name: str, packages: Iterable[Package]) -> Optional[Set[str]]:
    """
    Names of the other packages holding at least one dependency of `target_name`.
    Returns None when the target is unknown, has no dependencies or nothing matches.
    """
    packages = list(packages)
    target = find_package(target_name, packages)
    if target is None or not target.dependencies:
        return None

    wanted = set(target.dependencies)
    names = {
        package.name
        for package in _others(target_name, packages)
        if not wanted.isdisjoint(package.dependencies)
    }
    return names or None
