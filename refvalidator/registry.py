"""
Provider Registry.

Binds a capability category (auth, database, ...) and a provider name to
a provider instance, with a configured default name per category.

The registry is an ordinary object: the application builds one at
start-up and hands it to request handlers through AppState, and tests
build their own. Registration happens before requests are served, so
lookups are plain dict reads and need no locking.

Usage:
    registry = ProviderRegistry.from_settings(settings)
    registry.register(ProviderCategory.AUTH, "mock", MockAuthProvider())

    auth = registry.resolve(ProviderCategory.AUTH)   # configured default
    auth = registry.auth("mock")                     # typed accessor
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import DEFAULT_PROVIDER_NAME, Settings, get_logger
from .exceptions import ProviderNotFoundError
from .providers.auth.interface import AuthProviderInterface
from .providers.blockchain.interface import BlockchainProviderInterface
from .providers.database.interface import DatabaseProviderInterface
from .providers.email.interface import EmailProviderInterface
from .providers.nlp.interface import NLPProviderInterface
from .providers.storage.interface import StorageProviderInterface
from .providers.vc.interface import VerifiableCredentialProviderInterface
from .providers.zk.interface import ZKProofProviderInterface

logger = get_logger("registry")


class ProviderCategory(str, Enum):
    """Capability categories a provider can be registered under."""
    AUTH = "auth"
    DATABASE = "database"
    EMAIL = "email"
    NLP = "nlp"
    STORAGE = "storage"
    BLOCKCHAIN = "blockchain"
    VC = "vc"
    ZK = "zk"


CATEGORY_INTERFACES: Dict[ProviderCategory, type] = {
    ProviderCategory.AUTH: AuthProviderInterface,
    ProviderCategory.DATABASE: DatabaseProviderInterface,
    ProviderCategory.EMAIL: EmailProviderInterface,
    ProviderCategory.NLP: NLPProviderInterface,
    ProviderCategory.STORAGE: StorageProviderInterface,
    ProviderCategory.BLOCKCHAIN: BlockchainProviderInterface,
    ProviderCategory.VC: VerifiableCredentialProviderInterface,
    ProviderCategory.ZK: ZKProofProviderInterface,
}

CategoryLike = Union[ProviderCategory, str]


class ProviderRegistry:
    """
    Name-to-instance lookup table per capability category.

    Attributes:
        _providers: category -> {name: provider}
        _defaults: category -> default provider name
    """

    def __init__(self, defaults: Optional[Mapping[str, str]] = None):
        self._providers: Dict[ProviderCategory, Dict[str, Any]] = {
            category: {} for category in ProviderCategory
        }
        self._defaults: Dict[ProviderCategory, str] = {
            category: DEFAULT_PROVIDER_NAME for category in ProviderCategory
        }
        for key, name in (defaults or {}).items():
            self._defaults[self._category(key)] = name or DEFAULT_PROVIDER_NAME

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        """Build an empty registry whose defaults come from *_PROVIDER settings."""
        return cls(settings.DEFAULT_PROVIDERS)

    @staticmethod
    def _category(category: CategoryLike) -> ProviderCategory:
        try:
            return ProviderCategory(category)
        except ValueError:
            valid = ", ".join(c.value for c in ProviderCategory)
            raise ValueError(f"Unknown provider category '{category}'. Valid: {valid}") from None

    # =========================================================================
    # Core operations
    # =========================================================================

    def register(self, category: CategoryLike, name: str, provider: Any) -> None:
        """
        Bind a provider to (category, name), replacing any previous binding.

        Raises:
            TypeError: If the provider does not implement the category's interface
        """
        category = self._category(category)
        interface = CATEGORY_INTERFACES[category]
        if not isinstance(provider, interface):
            raise TypeError(
                f"{type(provider).__name__} does not implement {interface.__name__}"
            )
        if name in self._providers[category]:
            logger.info("Replacing %s provider '%s'", category.value, name)
        self._providers[category][name] = provider
        logger.debug("Registered %s provider '%s' (%s)", category.value, name, type(provider).__name__)

    def resolve(self, category: CategoryLike, name: Optional[str] = None) -> Any:
        """
        Get the provider bound to `name`, or to the category's default.

        Raises:
            ProviderNotFoundError: If nothing is registered under that name
        """
        category = self._category(category)
        provider_name = name or self._defaults[category]
        bound = self._providers[category]
        if provider_name not in bound:
            raise ProviderNotFoundError(category.value, provider_name, bound.keys())
        return bound[provider_name]

    def list_available(
        self, category: Optional[CategoryLike] = None
    ) -> Union[List[str], Dict[str, List[str]]]:
        """
        Registered provider names.

        Returns:
            Names for one category when `category` is given, otherwise a
            mapping of every category value to its names
        """
        if category is not None:
            return list(self._providers[self._category(category)])
        return {c.value: list(bound) for c, bound in self._providers.items()}

    def configured_default(self, category: CategoryLike) -> str:
        return self._defaults[self._category(category)]

    def default_providers(self) -> Dict[str, str]:
        return {c.value: name for c, name in self._defaults.items()}

    def has_provider(self, category: CategoryLike, name: str) -> bool:
        return name in self._providers[self._category(category)]

    def reset(self) -> None:
        """Drop every binding. Defaults are kept."""
        for bound in self._providers.values():
            bound.clear()

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def auth(self, name: Optional[str] = None) -> AuthProviderInterface:
        return self.resolve(ProviderCategory.AUTH, name)

    def database(self, name: Optional[str] = None) -> DatabaseProviderInterface:
        return self.resolve(ProviderCategory.DATABASE, name)

    def email(self, name: Optional[str] = None) -> EmailProviderInterface:
        return self.resolve(ProviderCategory.EMAIL, name)

    def nlp(self, name: Optional[str] = None) -> NLPProviderInterface:
        return self.resolve(ProviderCategory.NLP, name)

    def storage(self, name: Optional[str] = None) -> StorageProviderInterface:
        return self.resolve(ProviderCategory.STORAGE, name)

    def blockchain(self, name: Optional[str] = None) -> BlockchainProviderInterface:
        return self.resolve(ProviderCategory.BLOCKCHAIN, name)

    def vc(self, name: Optional[str] = None) -> VerifiableCredentialProviderInterface:
        return self.resolve(ProviderCategory.VC, name)

    def zk(self, name: Optional[str] = None) -> ZKProofProviderInterface:
        return self.resolve(ProviderCategory.ZK, name)
