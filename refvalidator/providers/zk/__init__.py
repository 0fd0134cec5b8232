from .interface import ZKProofProviderInterface

__all__ = ["ZKProofProviderInterface"]
