"""Credential persistence."""

from .credentials import (
    DEFAULT_NAMESPACE,
    CredentialStore,
    InMemoryCredentialStore,
    JsonFileCredentialStore,
)

__all__ = [
    "DEFAULT_NAMESPACE",
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
]
