"""Domain protocol surface: one stateless class per area of the game service."""
from .admin import AdminApi
from .auction import AuctionApi
from .auth import AuthApi
from .draw import DraftApi, DrawApi
from .game import AssetApi, GameApi
from .invite import InviteApi
from .policy import PolicyApi
from .trade import TradeApi

__all__ = [
    "AdminApi",
    "AssetApi",
    "AuctionApi",
    "AuthApi",
    "DraftApi",
    "DrawApi",
    "GameApi",
    "InviteApi",
    "PolicyApi",
    "TradeApi",
]
