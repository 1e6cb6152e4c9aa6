"""storefront: cart and checkout core for a client-side storefront."""

__version__ = "0.1.0"
