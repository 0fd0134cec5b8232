from .interface import VerifiableCredentialProviderInterface

__all__ = ["VerifiableCredentialProviderInterface"]
