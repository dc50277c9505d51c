"""
Catalog models — sources, applications, packages, distributions.

These mirror the admin-editable tables the resolution engine reads.
The engine treats every instance as read-only: one consistent
snapshot is loaded per call and discarded afterwards.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

# Placeholder substituted with the quoted package list.
PACKAGES_PLACEHOLDER = "{packages}"

# Per-family mapping key that applies to every family without its own entry.
ANY_FAMILY = "*"


# ── Family-dependent commands ───────────────────────────────────────


class UniformCommand(BaseModel):
    """A command used unchanged on every distro family."""

    kind: Literal["uniform"] = "uniform"
    command: str

    def for_family(self, family: str) -> str | None:
        return self.command or None


class PerFamilyCommand(BaseModel):
    """A command that differs by distro family.

    A family with no entry (and no ``*`` entry) gets no command.
    """

    kind: Literal["per_family"] = "per_family"
    commands: dict[str, str | None] = Field(default_factory=dict)

    def for_family(self, family: str) -> str | None:
        cmd = self.commands.get(family)
        if cmd:
            return cmd
        return self.commands.get(ANY_FAMILY) or None


FamilyCommand = Annotated[
    Union[UniformCommand, PerFamilyCommand],
    Field(discriminator="kind"),
]


def _coerce_family_command(value: Any) -> Any:
    """Accept the loose catalog shapes: a plain string or a family mapping."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return {"kind": "uniform", "command": value}
    if isinstance(value, dict) and "kind" not in value:
        return {"kind": "per_family", "commands": value}
    return value


# ── Sources ─────────────────────────────────────────────────────────


class MethodVariant(BaseModel):
    """One install-method flavor of a source (e.g. nix-shell vs nix-env).

    ``ephemeral`` variants leave nothing behind, so they have no
    uninstall or cleanup commands.
    """

    install_template: str
    remove_template: str | None = None
    setup_command: FamilyCommand | None = None
    cleanup_command: FamilyCommand | None = None
    package_prefix: str = ""      # prepended to install identifiers only (e.g. "nixpkgs.")
    ephemeral: bool = False

    @model_validator(mode="before")
    @classmethod
    def _loose_commands(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("setup_command", "cleanup_command"):
                if key in data:
                    data[key] = _coerce_family_command(data[key])
        return data


class Source(BaseModel):
    """A package manager or distribution channel."""

    id: str
    slug: str
    name: str
    category: str = "native"
    kind: Literal["template", "script"] = "template"

    install_template: str = ""
    remove_template: str | None = None
    requires_sudo: bool = False
    setup_command: FamilyCommand | None = None
    cleanup_command: FamilyCommand | None = None
    dependency_cleanup_command: str | None = None
    priority: int = 0
    api_endpoint: str | None = None

    install_methods: dict[str, MethodVariant] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _loose_commands(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("id", data.get("slug"))
            for key in ("setup_command", "cleanup_command"):
                if key in data:
                    data[key] = _coerce_family_command(data[key])
        return data

    @property
    def supports_dependency_cleanup(self) -> bool:
        return bool(self.dependency_cleanup_command)

    @property
    def supports_uninstall(self) -> bool:
        return self.kind == "script" or bool(self.remove_template)


# ── Applications and packages ───────────────────────────────────────


class UninstallInfo(BaseModel):
    """How to remove a script-installed package."""

    linux: str | None = None
    windows: str | None = None
    manual_instructions: str | None = None

    def for_os(self, os_name: str) -> str | None:
        return getattr(self, os_name, None)


class ScriptUrls(BaseModel):
    """Per-OS installer script locations for ``script`` sources."""

    linux: str | None = None
    windows: str | None = None

    def for_os(self, os_name: str) -> str | None:
        return getattr(self, os_name, None)


class Application(BaseModel):
    """A catalog application (what the user selects)."""

    id: str
    slug: str
    display_name: str
    category: str = ""
    manual_instructions: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "slug" in data:
            data = {**data, "id": data["slug"]}
        return data


class Package(BaseModel):
    """An application as published by one source."""

    app_id: str
    source_id: str
    identifier: str
    is_available: bool = True
    version: str | None = None
    size: int | None = None
    maintainer: str | None = None

    setup_command: FamilyCommand | None = None    # per-package repo setup (PPA, COPR)
    cleanup_command: FamilyCommand | None = None
    script_url: ScriptUrls = Field(default_factory=ScriptUrls)
    uninstall: UninstallInfo | None = None

    @model_validator(mode="before")
    @classmethod
    def _loose_commands(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("setup_command", "cleanup_command"):
                if key in data:
                    data[key] = _coerce_family_command(data[key])
        return data


# ── Distributions ───────────────────────────────────────────────────


class Distribution(BaseModel):
    """A target operating system distribution."""

    id: str
    slug: str
    name: str
    family: str
    based_on: str | None = None   # informational only

    @model_validator(mode="before")
    @classmethod
    def _default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "slug" in data:
            data = {**data, "id": data["slug"]}
        return data


class DistroSource(BaseModel):
    """Links a distribution to a usable source with a distro-local rank."""

    distro_id: str
    source_id: str
    priority: int = 0
    is_default: bool = False
