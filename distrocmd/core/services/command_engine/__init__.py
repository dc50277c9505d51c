"""
Command resolution engine — package re-exports.

    from distrocmd.core.services.command_engine import generate_install_commands

Layers: data → domain → resolver → synthesis → orchestration.
"""

# ── L2: Resolver ──
from distrocmd.core.services.command_engine.resolver.snapshot import (  # noqa: F401
    CatalogSnapshot,
    load_snapshot,
)
from distrocmd.core.services.command_engine.resolver.source_resolution import (  # noqa: F401
    Resolution,
    normalize_preference,
    resolve,
    resolve_snapshot,
)

# ── L3: Synthesis ──
from distrocmd.core.services.command_engine.synthesis.command_synthesis import (  # noqa: F401
    MODE_INSTALL,
    MODE_UNINSTALL,
    Synthesis,
    SynthesisOptions,
    synthesize,
)
from distrocmd.core.services.command_engine.synthesis.reporting import (  # noqa: F401
    Report,
    build_report,
)
from distrocmd.core.services.command_engine.synthesis.scripts import (  # noqa: F401
    render_script,
)

# ── L4: Orchestration ──
from distrocmd.core.services.command_engine.orchestration.orchestrator import (  # noqa: F401
    generate_install_commands,
    generate_uninstall_commands,
    parse_request,
)
