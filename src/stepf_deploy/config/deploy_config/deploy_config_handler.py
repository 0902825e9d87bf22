from typing import Any, Dict

from stepf_deploy.config.deploy_config.deploy_config_model import DeployConfig
from stepf_deploy.config.settings import settings
from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()


class DeployConfigManager:
    """
    Singleton class to manage the deploy configuration.
    Reads the Dynaconf settings (stepf_config.json, STEPF_* environment variables, .env)
    and exposes them as a validated DeployConfig.
    """
    _instance = None
    _config: DeployConfig = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(DeployConfigManager, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self) -> None:
        """
        Load configuration from the Dynaconf settings object.
        """
        config_data: Dict[str, Any] = {
            key.upper(): value for key, value in settings.as_dict().items()
        }

        # Dynamically create DeployConfig instance using from_dict to handle known and arbitrary fields
        self._config = DeployConfig.from_dict(config_data)

        # Validate the configuration
        self._config.validate()

        logger.debug(f"Configuration loaded with region {self._config.region}")

    @classmethod
    def get_config(cls) -> DeployConfig:
        """
        Get the loaded configuration object.

        :return: The DeployConfig instance.
        """
        return cls()._config

    @classmethod
    def get(cls, key: str, default=None):
        """
        Get a configuration value by key.

        :param key: The configuration key.
        :param default: Default value if key is not found.
        :return: The configuration value.
        """
        value = cls.get_config().get_property(key)
        return default if value is None else value

    @classmethod
    def reset(cls) -> None:
        """Drop the cached configuration so the next access reloads it."""
        cls._instance = None
        cls._config = None
