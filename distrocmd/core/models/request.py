"""
Request models — the two input shapes of the command engine.

Field names follow the JSON wire format (camelCase aliases) while
Python code uses snake_case attributes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Upper bound on one request, same limit the catalog UI enforces.
MAX_APPS_PER_REQUEST = 100

InstallMethod = Literal["ephemeral", "persistent", "declarative"]

# Tool-specific spellings accepted for the install method.
INSTALL_METHOD_ALIASES: dict[str, str] = {
    "ephemeral": "ephemeral",
    "persistent": "persistent",
    "declarative": "declarative",
    "nix-shell": "ephemeral",
    "nix-env": "persistent",
    "nix-flakes": "declarative",
}

DEFAULT_INSTALL_METHOD: InstallMethod = "ephemeral"


class InstallRequest(BaseModel):
    """Generate install commands for a set of apps on one distro."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    distro_slug: str = Field(alias="distroSlug", min_length=1)
    app_ids: list[str] = Field(
        alias="appIds",
        min_length=1,
        max_length=MAX_APPS_PER_REQUEST,
    )
    source_preference: str = Field(default="auto", alias="sourcePreference")
    install_method: InstallMethod | None = Field(default=None, alias="installMethod")

    @field_validator("app_ids")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        # Duplicates are ignored; first occurrence keeps its position.
        return list(dict.fromkeys(v for v in value if v))

    @field_validator("source_preference", mode="before")
    @classmethod
    def _default_preference(cls, value: object) -> object:
        if value is None or value == "":
            return "auto"
        return value

    @field_validator("install_method", mode="before")
    @classmethod
    def _normalize_method(cls, value: object) -> object:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            # Unknown names fall back to the default method downstream.
            return INSTALL_METHOD_ALIASES.get(value.strip().lower())
        return value


class UninstallRequest(InstallRequest):
    """Generate uninstall commands; optionally reverse setup and prune deps."""

    include_dependency_cleanup: bool = Field(
        default=False, alias="includeDependencyCleanup",
    )
    include_setup_cleanup: bool = Field(default=False, alias="includeSetupCleanup")
