"""Subscriber plugins for cart, checkout, and navigation events.

Display collaborators implement any subset of the hooks in
:class:`~storefront.plugins.hookspecs.StorefrontHookSpec` using the
``hookimpl`` marker exported here.
"""

from __future__ import annotations

import pluggy

hookimpl = pluggy.HookimplMarker("storefront")
