import os

import pytest

from pacman_helper.modules.desc import Package


def write_desc(root, dirname, name, depends=(), optdepends=(), version="1.0-1"):
    pkg_dir = os.path.join(str(root), dirname)
    os.makedirs(pkg_dir, exist_ok=True)
    lines = ["%NAME%", name, "", "%VERSION%", version, ""]
    if depends:
        lines += ["%DEPENDS%", *depends, ""]
    if optdepends:
        lines += ["%OPTDEPENDS%", *optdepends, ""]
    with open(os.path.join(pkg_dir, "desc"), "w", encoding="utf-8") as fh:
        fh.write("\n".join(lines))
    return pkg_dir


@pytest.fixture
def packages():
    return [
        Package(name="a", dependencies=("bottle", "cup", "plate")),
        Package(name="b", dependencies=("bulb", "wire", "plate")),
        Package(name="c", dependencies=("pluto", "mars", "cup")),
    ]


@pytest.fixture
def make_desc():
    return write_desc


@pytest.fixture
def local_db(tmp_path):
    """A small fake /var/lib/pacman/local."""
    root = tmp_path / "local"
    root.mkdir()
    (root / "ALPM_DB_VERSION").write_text("9\n")
    write_desc(root, "a-1.0-1", "a", depends=["bottle", "cup>=2", "plate=1.0"])
    write_desc(root, "b-1.0-1", "b", depends=["bulb", "wire", "plate"])
    write_desc(root, "c-1.0-1", "c", depends=["pluto", "mars", "cup"],
               optdepends=["venus: for the evening sky"])
    write_desc(root, "lonely-1.0-1", "lonely")
    (root / "nodesc-1.0-1").mkdir()
    return root
