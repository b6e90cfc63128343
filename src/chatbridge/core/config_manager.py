import yaml
import os
from typing import Dict, Any, Optional

from .logging import logger
from .error_handling import ErrorHandler, ErrorContext


class ConfigManager:
    """
    Optional file based provider configuration.

    The YAML file holds init options per provider alias::

        providers:
          openai:
            api_key_env: OPENAI_API_KEY
            base_url: https://api.together.xyz/v1
            headers:
              x-team: research

    ``api_key_env`` is resolved against the environment once, when the
    options are requested.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.getenv("CHATBRIDGE_CONFIG", "config/providers.yaml")
        self.config = self._load_config()

        logger.info("Configuration manager initialized", config={
            "config_path": self.config_path,
            "config_exists": os.path.exists(self.config_path),
            "providers_count": len(self.config.get("providers", {}))
        })

    def _load_config(self) -> Dict[str, Any]:
        config = {"providers": {}}
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            # Файл конфигурации необязателен
            logger.debug(f"Configuration file not found: {self.config_path}")
            return config
        except yaml.YAMLError as e:
            raise ErrorHandler.handle_provider_config_error(
                error_details=f"Error parsing YAML file {self.config_path}: {e}",
                context=ErrorContext(),
                original_exception=e
            )

        if not isinstance(loaded, dict) or not isinstance(loaded.get("providers", {}), dict):
            raise ErrorHandler.handle_provider_config_error(
                error_details=f"'providers' in {self.config_path} must be a mapping",
                context=ErrorContext()
            )
        config["providers"] = loaded.get("providers") or {}
        return config

    def provider_options(self, provider_name: str) -> Dict[str, Any]:
        """Возвращает опции инициализации провайдера с подставленным API ключом"""
        options = dict(self.config.get("providers", {}).get(provider_name) or {})
        api_key_env = options.pop("api_key_env", None)
        if api_key_env and "api_key" not in options:
            api_key = os.environ.get(api_key_env)
            if api_key:
                options["api_key"] = api_key
            else:
                logger.warning(f"API key variable {api_key_env} is not set", provider_name=provider_name)
        return options

    def reload_config(self):
        logger.info("Reloading configuration", config={"config_path": self.config_path})
        self.config = self._load_config()
