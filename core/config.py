import os
import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG = {
    "server_name": "telegram-bot-mcp",
    "telegram_api_url": "https://api.telegram.org",
    "request_timeout": 30.0,
    "bot_token": None,
    "log_dir": None,
    "log_level": "INFO",
}

# environment variable -> config key
ENV_OVERRIDES = {
    "TELEGRAM_BOT_TOKEN": "bot_token",
    "TELEGRAM_API_URL": "telegram_api_url",
    "TELEGRAM_REQUEST_TIMEOUT": "request_timeout",
    "MCP_LOG_LEVEL": "log_level",
}


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file and environment on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _config_path(cls) -> str:
        override = os.environ.get("TELEGRAM_MCP_CONFIG")
        if override:
            return os.path.abspath(override)
        config_path = os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        return os.path.abspath(config_path)

    @classmethod
    def _load_config(cls):
        """
        Load defaults, then the YAML file (if present), then environment overrides
        (including a `.env` file) into the class variable _config.
        """
        load_dotenv()
        config = dict(DEFAULT_CONFIG)

        config_path = cls._config_path()
        if os.path.isfile(config_path):
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"{config_path} must contain a mapping at the top level")
            config.update({k: v for k, v in loaded.items() if v is not None})

        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                config[key] = value

        config["request_timeout"] = float(config["request_timeout"])
        config["telegram_api_url"] = str(config["telegram_api_url"]).rstrip("/")
        cls._config = config

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


def reset_config():
    """Drop the cached configuration so the next `get_config()` reloads it."""
    ConfigLoader._instance = None
    ConfigLoader._config = None
