class LLMError(RuntimeError):
    pass


class ConfigurationError(LLMError):
    """Raised when environment/config values are missing or invalid."""


class AuthenticationError(LLMError):
    """Raised when the backend rejects the configured credentials."""


class NetworkError(LLMError):
    """Raised on transport failures, timeouts, rate limits and 5xx responses.

    These are the only errors the retry helper treats as transient.
    """


class ValidationError(LLMError):
    """Raised when the model output cannot be validated against the requested schema."""
