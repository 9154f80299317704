"""
Process-level settings for Passwd Forge.

These are not part of a generation configuration; they supply the defaults
that ``default_config()`` starts from and can be overridden through
environment variables. Logging is configured separately, see
``configs.logging_config.configure_logging``.
"""

import os
from dataclasses import dataclass
from typing import Any, ClassVar

from passwd_forge.configs.config_essentials import EnvMapping, EnvVarError


@dataclass
class ForgeSettings:
    """
    Ambient defaults for password generator instances.

    Attributes:
        dictionary_file_path: Word list used by the default configuration
        random_increment: Random values fetched per call to the random source
        ENV_VARS: Mapping of environment variables to config attributes
    """

    # Relative to the working directory unless overridden
    dictionary_file_path: str = "dict.txt"

    random_increment: int = 10

    # Environment variable mapping for configuration overrides
    ENV_VARS: ClassVar[EnvMapping] = {
        "PASSWD_FORGE_DICTIONARY": ("dictionary_file_path", str),
        "PASSWD_FORGE_RANDOM_INCREMENT": ("random_increment", int),
    }

    def load_from_env(self) -> None:
        """
        Load configuration values from environment variables.

        Raises:
            EnvVarError: If an environment variable cannot be converted to the
                target type or names an attribute that doesn't exist
        """
        for env_var, (attr_name, converter) in self.ENV_VARS.items():
            if env_var in os.environ:
                self._set_from_env(env_var, attr_name, converter)

    def _set_from_env(self, env_var: str, attr_name: str, converter: Any) -> None:
        value = os.environ[env_var]
        if not hasattr(self, attr_name):
            raise EnvVarError(
                f"Configuration attribute '{attr_name}' not found in {self.__class__.__name__}"
            )
        try:
            setattr(self, attr_name, converter(value))
        except (ValueError, TypeError) as e:
            raise EnvVarError(f"Invalid value '{value}' for {env_var}: {str(e)}") from e

    @classmethod
    def from_env(cls) -> "ForgeSettings":
        """Create settings with environment overrides applied."""
        settings = cls()
        settings.load_from_env()
        return settings
