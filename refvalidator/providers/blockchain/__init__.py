from .interface import BlockchainProviderInterface

__all__ = ["BlockchainProviderInterface"]
