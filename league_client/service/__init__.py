"""Stateful client services: token storage, session store, request pipeline."""
__all__ = ["storage", "session", "pipeline"]
