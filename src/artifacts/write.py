from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import DepsGenerator, ModulesGenerator
from contract.artifacts import DEPS_EDGELIST, GRAPH_SUMMARY_JSON, MODULES_JSONL
from logs import get_logger
from project.evaluate import evaluate_config
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import BuildConfig

logger = get_logger(__name__)


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: BuildConfig | None = None,
) -> dict[str, object]:
    """Evaluate the build at ``root`` and write its graph artifacts.

    Args:
        root: Build root holding buildgraph.toml
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration, loaded from ``root`` when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.

    Raises:
        ConfigError: If the configuration is invalid.
        BuildGraphError: If the declarations cannot be evaluated.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    graph = evaluate_config(config, root)

    ModulesGenerator().generate(graph, out_dir)
    edges, _ = DepsGenerator().generate(graph, out_dir)

    artifacts_list = [MODULES_JSONL, DEPS_EDGELIST, GRAPH_SUMMARY_JSON]
    logger.info("wrote %d artifacts to %s", len(artifacts_list), out_dir)

    return {
        "root": graph.root.name,
        "module_count": len(graph.modules),
        "edge_count": len(edges),
        "repository_count": len(graph.repositories),
        "plugin_count": len(graph.plugins),
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
