"""
Provider layer for swappable implementations.

Each capability category has an abstract interface that concrete
implementations must satisfy. Implementations are bound to names in a
ProviderRegistry (see refvalidator.registry) and selected at runtime by
the *_PROVIDER settings, so a real service can replace a mock without
code changes.

Directory Structure:
    providers/
    ├── __init__.py        # This file
    ├── auth/              # Authentication (interface + mock)
    ├── database/          # Persistence (interface + in-memory mock)
    ├── email/             # Email delivery (interface + outbox mock)
    ├── nlp/               # Text analysis (interface + lexicon mock)
    ├── storage/           # File storage (interface + in-memory mock)
    ├── blockchain/        # Ledger issuance (interface only)
    ├── vc/                # Verifiable credentials (interface only)
    └── zk/                # Zero-knowledge proofs (interface only)
"""

# Providers are constructed and registered by refvalidator.state

__all__ = []
