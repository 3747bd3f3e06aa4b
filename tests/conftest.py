import jax
import pytest

from timelag import available_backends

# float64 series only reach the jax kernel unnarrowed with x64 enabled
jax.config.update("jax_enable_x64", True)


@pytest.fixture(params=available_backends())
def backend(request):
    return request.param


@pytest.fixture
def jax_without_x64():
    jax.config.update("jax_enable_x64", False)
    try:
        yield
    finally:
        jax.config.update("jax_enable_x64", True)
