"""Shared fixtures for cafeatures tests."""

import pathlib

import pytest


@pytest.fixture
def selection_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a feature selection limited to UNIX features on ext2."""
    path = tmp_path / "features.yaml"
    path.write_text(
        "with: [unix]\n"
        "without: [user-names]\n"
        "respect-nodump: false\n"
        "fs-type: ext2\n"
    )
    return path


@pytest.fixture
def empty_selection_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an empty selection file (all defaults)."""
    path = tmp_path / "empty.yaml"
    path.write_text("")
    return path
