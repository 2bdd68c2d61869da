from .structs import ApiCredentials, NetworkConfig, ClientConfig
from .config_manager import load_config, config_from_env

__all__ = ['ApiCredentials', 'NetworkConfig', 'ClientConfig', 'load_config', 'config_from_env']
