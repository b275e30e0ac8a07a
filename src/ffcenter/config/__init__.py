"""Configuration helpers for data providers."""

from .providers import ProviderProfile, RateLimit, get_provider, iter_providers

__all__ = [
    "ProviderProfile",
    "RateLimit",
    "get_provider",
    "iter_providers",
]
