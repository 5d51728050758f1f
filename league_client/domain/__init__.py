"""Pure client-side domain: phase vocabulary, route catalogue, navigation guard.

Nothing here performs I/O, so it can be unit-tested without a transport.
"""
__all__ = ["phases", "routes", "navigation"]
