"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration outside of the client constructor.
"""

from typing import Optional

from ..config import TrelloClientConfig
from ...utils.sanitizer import mask_secret


def load_from_env(
    env_file: Optional[str] = None,
    **overrides
) -> TrelloClientConfig:
    """
    Load TrelloClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (TRELLO_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: api_key, token, timeout, retries, verbose_logging,
            plus any other TrelloClientConfig field (retry, logging, base_url)

    Returns:
        TrelloClientConfig instance

    Raises:
        ConfigurationError: If credentials are missing everywhere or an
            environment value is invalid and not overridden

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.test", retries=0)
    """
    return TrelloClientConfig.resolve(
        overrides.pop('api_key', None),
        overrides.pop('token', None),
        timeout=overrides.pop('timeout', None),
        retries=overrides.pop('retries', None),
        verbose_logging=overrides.pop('verbose_logging', None),
        env_file=env_file,
        **overrides
    )


def print_config_summary(config: TrelloClientConfig, mask_secrets: bool = True):
    """
    Print configuration summary.

    Example:
        >>> print_config_summary(load_from_env())
        TrelloClientConfig:
          base_url: https://api.trello.com/1
          api_key: 0123***cdef
          ...
    """
    api_key = mask_secret(config.api_key) if mask_secrets else config.api_key
    token = mask_secret(config.token) if mask_secrets else config.token

    print("TrelloClientConfig:")
    print(f"  base_url: {config.base_url}")
    print(f"  api_key: {api_key}")
    print(f"  token: {token}")
    print(f"  timeout: {config.timeout_ms}ms")
    print(f"  retries: {config.retries}")
    print(f"  backoff: base={config.retry.backoff_base_ms}ms, factor={config.retry.backoff_factor}, max={config.retry.backoff_max_ms}ms")
    print(f"  verbose_logging: {config.verbose_logging}")

    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
        if config.logging.file_path:
            print(f"    file: {config.logging.file_path}")
