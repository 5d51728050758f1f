"""Async client for the league game service.

Exposes the package version and the `LeagueClient` facade; everything else is
reachable through its submodules (api, domain, service).
"""
from importlib.metadata import PackageNotFoundError, version

try:  # Resolves once the distribution is installed; else default.
    __version__ = version("league-client")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from .client import LeagueClient  # noqa: E402

__all__ = ["LeagueClient", "__version__"]
