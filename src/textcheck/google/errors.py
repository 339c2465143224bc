from textcheck.llm.errors import ConfigurationError


class CredentialsError(ConfigurationError):
    """Google service-account credentials could not be loaded."""
