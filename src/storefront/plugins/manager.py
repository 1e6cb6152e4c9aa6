"""Subscriber registration on top of a pluggy PluginManager.

Subscribers come from two places: objects registered directly by the
presentation layer (``Storefront.subscribe``) and installed packages
exposing a ``storefront.plugins`` entry point.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from storefront.plugins.hookspecs import StorefrontHookSpec

PROJECT_NAME = "storefront"
ENTRY_POINT_GROUP = "storefront.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages subscriber registration and hook lookup."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(StorefrontHookSpec)

    def discover(self) -> list[str]:
        """Load entry-point subscribers and return all registered names."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_class_plugins()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> str:
        """Register a subscriber instance. Returns the name it was registered under."""
        resolved_name = name or f"{plugin.__class__.__name__}-{id(plugin):x}"
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered subscriber: %s", resolved_name)
        return resolved_name

    def caller_for(self, hook_name: str, plugin: object) -> pluggy.HookCaller:
        """Hook caller for *hook_name* that reaches only *plugin*.

        Calls still go through pluggy, so wrapper implementations run.
        """
        others = [
            impl.plugin
            for impl in getattr(self._pm.hook, hook_name).get_hookimpls()
            if impl.plugin is not plugin
        ]
        return self._pm.subset_hook_caller(hook_name, others)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def is_registered(self, plugin: object) -> bool:
        return self._pm.is_registered(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _instantiate_class_plugins(self) -> None:
        """Replace entry-point classes with instances so ``self`` is bound."""
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point subscriber %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
