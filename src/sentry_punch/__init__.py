from .HolePuncher import HolePuncher

__all__ = [
    "HolePuncher",
]
