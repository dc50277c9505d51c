"""
Domain models — Pydantic catalog types plus request/result shapes.

All models are re-exported here for convenient access:

    from distrocmd.core.models import Source, Distribution, InstallRequest
"""

from distrocmd.core.models.catalog import (
    ANY_FAMILY,
    PACKAGES_PLACEHOLDER,
    Application,
    DistroSource,
    Distribution,
    FamilyCommand,
    MethodVariant,
    Package,
    PerFamilyCommand,
    ScriptUrls,
    Source,
    UniformCommand,
    UninstallInfo,
)
from distrocmd.core.models.request import (
    DEFAULT_INSTALL_METHOD,
    INSTALL_METHOD_ALIASES,
    MAX_APPS_PER_REQUEST,
    InstallMethod,
    InstallRequest,
    UninstallRequest,
)
from distrocmd.core.models.result import (
    BreakdownEntry,
    InstallResult,
    ManualStep,
    UninstallResult,
)

__all__ = [
    "ANY_FAMILY",
    "Application",
    "BreakdownEntry",
    "DEFAULT_INSTALL_METHOD",
    "DistroSource",
    "Distribution",
    "FamilyCommand",
    "INSTALL_METHOD_ALIASES",
    "InstallMethod",
    "InstallRequest",
    "InstallResult",
    "MAX_APPS_PER_REQUEST",
    "ManualStep",
    "MethodVariant",
    "PACKAGES_PLACEHOLDER",
    "Package",
    "PerFamilyCommand",
    "ScriptUrls",
    "Source",
    "UniformCommand",
    "UninstallInfo",
    "UninstallRequest",
]
