"""Relay fee, swap quote and payload helpers for the token bridge relayer."""

from importlib import metadata


def __getattr__(name: str) -> str:
    """Expose the package version via ``token_bridge_relayer.__version__``."""
    if name == "__version__":
        try:
            return metadata.version("token-bridge-relayer")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


__all__ = ["__version__"]
