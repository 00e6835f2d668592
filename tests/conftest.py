"""Pytest configuration for raymat tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.

Test modules import raymat inside each test: the package declares Taichi
fields at import time, which must not happen before ti.init().
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_arenas():
    """Clear the texture and material arenas around each test."""
    from raymat.materials.library import clear_materials
    from raymat.textures.texture import clear_textures

    def _clear_all():
        clear_textures()
        clear_materials()

    _clear_all()
    yield
    _clear_all()
