"""Plugin declarations made at the root of a build."""

from __future__ import annotations

from logs import get_logger
from project.errors import DuplicatePluginId
from project.models import PluginDeclaration

logger = get_logger(__name__)


class PluginDeclarations:
    """Plugins in declaration order, unique by id."""

    def __init__(self) -> None:
        self._plugins: dict[str, PluginDeclaration] = {}

    def declare_plugin(
        self, plugin_id: str, version: str | None = None, *, apply: bool = True
    ) -> PluginDeclaration:
        if plugin_id in self._plugins:
            raise DuplicatePluginId(plugin_id)
        plugin = PluginDeclaration(id=plugin_id, version=version, apply=apply)
        self._plugins[plugin_id] = plugin
        logger.debug(
            "declared plugin %s%s%s",
            plugin_id,
            f" {version}" if version else "",
            "" if apply else " (not applied)",
        )
        return plugin

    def all(self) -> tuple[PluginDeclaration, ...]:
        return tuple(self._plugins.values())

    def applied(self) -> tuple[PluginDeclaration, ...]:
        return tuple(plugin for plugin in self._plugins.values() if plugin.apply)


__all__ = ["PluginDeclarations"]
