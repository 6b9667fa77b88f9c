import pytest

from quiver3d import GLTFSurface


@pytest.fixture
def surface():
    return GLTFSurface()
