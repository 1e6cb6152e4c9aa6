"""Infrastructure layer: durable storage backends for the cart slot.

Infrastructure may import from domain. It must never import from
services, commands, or output.
"""
