"""
VargaCore: divisional chart (varga) engine.

Projects a natal chart, given as sidereal longitudes, into any supported
divisional chart. Pure computation: no ephemeris, no I/O beyond loading the
versioned lookup tables once.

Main entry points:
- vargacore.projector.project(base_chart, scheme_id) -> DerivedChart
- vargacore.facade: varga_sign, varga_sign_batch, project_many, ...
- vargacore.schemes.get_registry() / build_registry(config)
"""

from .core.errors import (
    InvalidLongitudeError,
    UnsupportedSchemeError,
    VargaConfigError,
    VargaError,
    VargaInvariantError,
)
from .core_types import BaseChart, BodyPlacement, DerivedChart
from .facade import (
    describe_scheme,
    list_schemes,
    project_from_longitudes,
    project_many,
    project_shodasavarga,
    varga_pada,
    varga_sign,
    varga_sign_batch,
)
from .projector import project
from .schemes import EQUAL_249, PROPORTIONAL_249, build_registry, get_registry

__all__ = [
    "BaseChart",
    "BodyPlacement",
    "DerivedChart",
    "EQUAL_249",
    "InvalidLongitudeError",
    "PROPORTIONAL_249",
    "UnsupportedSchemeError",
    "VargaConfigError",
    "VargaError",
    "VargaInvariantError",
    "build_registry",
    "describe_scheme",
    "get_registry",
    "list_schemes",
    "project",
    "project_from_longitudes",
    "project_many",
    "project_shodasavarga",
    "varga_pada",
    "varga_sign",
    "varga_sign_batch",
]

__version__ = "1.0.0"
