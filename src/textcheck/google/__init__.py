"""Google credential loading for the Vertex AI backend."""

from ._auth import AuthConfig, load_credentials, resolve_project

__all__ = ["AuthConfig", "load_credentials", "resolve_project"]
