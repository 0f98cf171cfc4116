from .connections import ConnectionRegistry

__all__ = ["ConnectionRegistry"]
