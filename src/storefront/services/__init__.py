"""Service layer: cart store, checkout process, view controller, facade.

Services may import from domain, infrastructure, and plugins.
They must never import from commands or output.
"""
