import os

import pytest

from pacman_helper.modules.config import HelperConfig
from pacman_helper.modules.database import (
    DatabaseReadError,
    LocalDatabase,
    load_packages,
)


def names(packages):
    return sorted(p.name for p in packages)


def test_load_skips_missing_descriptor(local_db):
    packages = load_packages(str(local_db))
    assert names(packages) == ["a", "b", "c", "lonely"]


def test_load_parses_descriptors(local_db):
    by_name = {p.name: p for p in load_packages(str(local_db))}
    assert by_name["a"].dependencies == ("bottle", "cup", "plate")
    assert by_name["c"].opt_dependencies == ("venus",)
    assert by_name["lonely"].dependencies == ()
    assert by_name["a"].version == "1.0-1"


def test_entries_only_lists_directories(local_db):
    entries = LocalDatabase(path=str(local_db)).entries()
    assert len(entries) == 5
    assert all(os.path.isdir(e) for e in entries)


def test_missing_root_fails(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(DatabaseReadError) as exc:
        load_packages(str(missing))
    assert exc.value.path == str(missing)
    assert isinstance(exc.value.__cause__, OSError)


def test_root_is_a_file_fails(tmp_path):
    f = tmp_path / "file"
    f.write_text("x")
    with pytest.raises(DatabaseReadError):
        load_packages(str(f))


def test_unreadable_descriptor_aborts_load(local_db):
    # a directory where the descriptor file should be can't be read
    (local_db / "broken-1.0-1" / "desc").mkdir(parents=True)
    with pytest.raises(DatabaseReadError) as exc:
        load_packages(str(local_db))
    assert exc.value.path.endswith(os.path.join("broken-1.0-1", "desc"))


def test_empty_name_package_is_kept(local_db):
    nameless = local_db / "weird-1.0-1"
    nameless.mkdir()
    (nameless / "desc").write_text("%DEPENDS%\nbottle\n")
    packages = load_packages(str(local_db))
    assert "" in names(packages)


def test_undecodable_bytes_are_tolerated(local_db):
    pkg_dir = local_db / "latin-1.0-1"
    pkg_dir.mkdir()
    (pkg_dir / "desc").write_bytes(b"%NAME%\nlatin\n\n%DESC%\ncaf\xe9\n")
    by_name = {p.name: p for p in load_packages(str(local_db))}
    assert by_name["latin"].description.startswith("caf")


def test_custom_descriptor_name(tmp_path):
    root = tmp_path / "db"
    (root / "x-1").mkdir(parents=True)
    (root / "x-1" / "meta").write_text("%NAME%\nx\n")
    assert names(load_packages(str(root), descriptor="meta")) == ["x"]
    assert load_packages(str(root)) == []


def test_path_from_config(tmp_path, local_db):
    conf = tmp_path / "pacman-helper.conf"
    conf.write_text(f"[database]\npath = {local_db}\n")
    db = LocalDatabase(cfg=HelperConfig([str(conf)]))
    assert db.path == str(local_db)
    assert db.descriptor == "desc"
    assert names(db.load()) == ["a", "b", "c", "lonely"]


def test_every_load_rereads_disk(local_db, make_desc):
    db = LocalDatabase(path=str(local_db))
    assert len(db.load()) == 4
    make_desc(local_db, "d-1.0-1", "d", depends=["cup"])
    assert len(db.load()) == 5


def test_loader_logger_reaches_parser(tmp_path, local_db):
    log_file = tmp_path / "db.log"
    conf = tmp_path / "c.conf"
    conf.write_text(
        "[logging]\nlevel = debug\nlog_to_console = false\n"
        f"log_to_file = true\nlog_file = {log_file}\n"
    )
    pkg_dir = local_db / "extra-1.0-1"
    pkg_dir.mkdir()
    (pkg_dir / "desc").write_text("%NAME%\nextra\n\n%PACKAGER%\nSomeone\n")
    LocalDatabase(path=str(local_db), cfg=HelperConfig([str(conf)])).load()
    text = log_file.read_text()
    assert "Skipping unknown section %PACKAGER%" in text
    assert "[database]" in text
