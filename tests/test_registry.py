"""Provider registry: registration, resolution and defaults."""
from types import SimpleNamespace

import pytest

from refvalidator.exceptions import ConfigurationError, ProviderNotFoundError
from refvalidator.models import NetworkInfo, TransactionStatus
from refvalidator.providers.auth import MockAuthProvider
from refvalidator.providers.blockchain import BlockchainProviderInterface
from refvalidator.providers.database import MockDatabaseProvider
from refvalidator.providers.email import MockEmailProvider
from refvalidator.registry import ProviderCategory, ProviderRegistry
from refvalidator.state import get_app_state


class LedgerStub(BlockchainProviderInterface):
    async def issue_credential(self, credential_hash: str) -> str:
        return "0x" + credential_hash

    async def verify_credential(self, credential_hash: str) -> bool:
        return True

    async def get_transaction_status(self, tx_hash: str) -> TransactionStatus:
        return TransactionStatus.CONFIRMED

    async def get_network_info(self) -> NetworkInfo:
        return NetworkInfo(chain_id=1, network_name="test", block_height=0)

    def get_provider_name(self) -> str:
        return "ledger"

    def is_available(self) -> bool:
        return True


class TestRegisterAndResolve:
    def test_resolve_returns_registered_instance(self):
        registry = ProviderRegistry()
        provider = MockAuthProvider()
        registry.register(ProviderCategory.AUTH, "mock", provider)

        assert registry.resolve(ProviderCategory.AUTH, "mock") is provider
        assert registry.auth("mock") is provider

    def test_resolve_without_name_uses_default(self):
        registry = ProviderRegistry()
        provider = MockDatabaseProvider()
        registry.register("database", "mock", provider)

        assert registry.resolve("database") is provider
        assert registry.database() is provider

    def test_configured_default_is_used(self):
        registry = ProviderRegistry({"database": "secondary"})
        primary = MockDatabaseProvider()
        secondary = MockDatabaseProvider(seed=False)
        registry.register("database", "mock", primary)
        registry.register("database", "secondary", secondary)

        assert registry.database() is secondary
        assert registry.database("mock") is primary

    def test_register_replaces_existing_binding(self):
        registry = ProviderRegistry()
        first, second = MockEmailProvider(), MockEmailProvider()
        registry.register("email", "mock", first)
        registry.register("email", "mock", second)

        assert registry.email() is second

    def test_unknown_name_raises_provider_not_found(self):
        registry = ProviderRegistry()
        registry.register("auth", "mock", MockAuthProvider())

        with pytest.raises(ProviderNotFoundError) as exc_info:
            registry.resolve("auth", "supabase")

        assert exc_info.value.status_code == 404
        assert "supabase" in exc_info.value.message
        assert "mock" in exc_info.value.message
        assert exc_info.value.to_dict()["error"] == "PROVIDERNOTFOUNDERROR"

    def test_category_without_implementation_raises(self):
        registry = ProviderRegistry()

        with pytest.raises(ProviderNotFoundError):
            registry.blockchain()
        with pytest.raises(ProviderNotFoundError):
            registry.vc()
        with pytest.raises(ProviderNotFoundError):
            registry.zk()

    def test_wrong_interface_is_rejected(self):
        registry = ProviderRegistry()

        with pytest.raises(TypeError):
            registry.register("database", "mock", MockAuthProvider())
        assert not registry.has_provider("database", "mock")

    def test_unknown_category_is_rejected(self):
        registry = ProviderRegistry()

        with pytest.raises(ValueError):
            registry.register("payments", "mock", MockAuthProvider())

    def test_custom_blockchain_provider(self):
        registry = ProviderRegistry({"blockchain": "ledger"})
        ledger = LedgerStub()
        registry.register(ProviderCategory.BLOCKCHAIN, "ledger", ledger)

        assert registry.blockchain() is ledger


class TestListingAndReset:
    def test_list_available(self, registry):
        assert registry.list_available("auth") == ["mock"]
        everything = registry.list_available()
        assert set(everything) == {c.value for c in ProviderCategory}
        assert everything["blockchain"] == []
        assert everything["database"] == ["mock"]

    def test_default_providers(self, registry):
        defaults = registry.default_providers()
        assert defaults["auth"] == "mock"
        assert len(defaults) == len(ProviderCategory)

    def test_reset_drops_bindings_and_keeps_defaults(self):
        registry = ProviderRegistry({"auth": "custom"})
        registry.register("auth", "custom", MockAuthProvider())

        registry.reset()

        assert registry.list_available("auth") == []
        assert registry.configured_default("auth") == "custom"
        with pytest.raises(ProviderNotFoundError):
            registry.auth()

    def test_blank_default_falls_back_to_mock(self):
        registry = ProviderRegistry({"email": ""})
        assert registry.configured_default("email") == "mock"

    def test_from_settings(self, settings):
        custom = settings.model_copy(update={"NLP_PROVIDER": "openai"})
        registry = ProviderRegistry.from_settings(custom)
        assert registry.configured_default("nlp") == "openai"
        assert registry.configured_default("auth") == "mock"


def test_state_requires_lifespan():
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))
    with pytest.raises(ConfigurationError) as exc_info:
        get_app_state(request)
    assert exc_info.value.status_code == 500
