"""Binance REST connector."""

from .provider import BinanceP2PConnector

__all__ = ["BinanceP2PConnector"]
