# ---------------------------------------------------------------------
# Gufo Labs: Project structure tests
# ---------------------------------------------------------------------
# Copyright (C) 2022-26, Gufo Labs
# See LICENSE.md for details
# ---------------------------------------------------------------------

# Python modules
import os

# Third-party modules
import pytest


def _get_project():
    d = [
        f
        for f in os.listdir(os.path.join("src", "gufo"))
        if not f.startswith(".") and not f.startswith("_")
    ]
    assert len(d) == 1
    return d[0]


PROJECT = _get_project()

REQUIRED_FILES = [
    ".github/workflows/tests.yml",
    ".gitignore",
    "CHANGELOG.md",
    "LICENSE.md",
    "README.md",
    "pyproject.toml",
    f"src/gufo/{PROJECT}/__init__.py",
    f"src/gufo/{PROJECT}/py.typed",
    "tests/test_ci.py",
    "tests/test_project.py",
]


def test_required_is_sorted():
    assert REQUIRED_FILES == list(
        sorted(REQUIRED_FILES)
    ), "REQUIRED_FILES must be sorted"


@pytest.mark.parametrize("name", REQUIRED_FILES)
def test_required_files(name: str):
    assert os.path.exists(name), f"File {name} is missed"


def test_version():
    m = __import__(f"gufo.{PROJECT}", {}, {}, "*")
    assert hasattr(m, "__version__"), "__init__.py must contain __version__"


def test_no_setup_py():
    assert not os.path.exists("setup.py"), "Use pyproject.toml only"
