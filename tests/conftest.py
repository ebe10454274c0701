import pytest

from fluxo.config import FluxoConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in configuration."""
    set_config(FluxoConfig())
    yield
    set_config(None)
