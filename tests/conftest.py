import os

import pytest


# Run kernels as plain Python in tests (no JIT compilation overhead)
os.environ.setdefault("NUMBA_DISABLE_JIT", "1")


@pytest.fixture(scope="session")
def registry():
    from vargacore.schemes import build_registry
    from vargacore.varga_config import VargaConfig

    return build_registry(VargaConfig())


@pytest.fixture
def fresh_singletons():
    """Reset process-wide config and registry around a test."""
    from vargacore.schemes import reset_registry
    from vargacore.varga_config import reset_config

    reset_config()
    reset_registry()
    yield
    reset_config()
    reset_registry()


@pytest.fixture
def single_body_chart():
    """Build a chart with one body at ``degree`` within ``sign_index``."""
    from vargacore.core_types import BaseChart

    def _make(degree: float, sign_index: int = 0, body: str = "Sun") -> BaseChart:
        return BaseChart(
            ascendant=10.0,
            bodies={body: sign_index * 30.0 + degree},
            midheaven=270.0,
        )

    return _make
