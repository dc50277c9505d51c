"""
Result models — what the engine hands back to the HTTP/CLI layers.

Plain dataclasses with ``to_dict()`` producing the JSON wire shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BreakdownEntry:
    """One source group: which packages a single command line covers."""

    source: str                   # source slug
    source_name: str
    package_identifiers: list[str] = field(default_factory=list)
    app_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "sourceName": self.source_name,
            "packageIdentifiers": list(self.package_identifiers),
            "appIds": list(self.app_ids),
        }


@dataclass
class ManualStep:
    """Free-text guidance for an app the engine cannot handle automatically."""

    app_id: str
    app_name: str
    instructions: str

    def to_dict(self) -> dict:
        return {
            "appId": self.app_id,
            "appName": self.app_name,
            "instructions": self.instructions,
        }


@dataclass
class InstallResult:
    """Output of an install request."""

    commands: list[str] = field(default_factory=list)
    setup_commands: list[str] = field(default_factory=list)
    breakdown: list[BreakdownEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    manual_steps: list[ManualStep] = field(default_factory=list)
    unresolved: dict[str, str] = field(default_factory=dict)  # app_id → reason code

    def to_dict(self) -> dict:
        return {
            "commands": list(self.commands),
            "setupCommands": list(self.setup_commands),
            "breakdown": [b.to_dict() for b in self.breakdown],
            "warnings": list(self.warnings),
            "manualSteps": [m.to_dict() for m in self.manual_steps],
        }


@dataclass
class UninstallResult:
    """Output of an uninstall request."""

    commands: list[str] = field(default_factory=list)
    cleanup_commands: list[str] = field(default_factory=list)
    dependency_cleanup_commands: list[str] = field(default_factory=list)
    breakdown: list[BreakdownEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    manual_steps: list[ManualStep] = field(default_factory=list)
    unresolved: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "commands": list(self.commands),
            "cleanupCommands": list(self.cleanup_commands),
            "dependencyCleanupCommands": list(self.dependency_cleanup_commands),
            "warnings": list(self.warnings),
            "breakdown": [b.to_dict() for b in self.breakdown],
            "manualSteps": [m.to_dict() for m in self.manual_steps],
        }
