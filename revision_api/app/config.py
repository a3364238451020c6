from functools import lru_cache
from typing import Mapping, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import ControllerConfig, NetworkConfig

# Key in the controller's network config map.
ISTIO_OUTBOUND_IP_RANGES_KEY = "istio.sidecar.includeOutboundIPRanges"


class ControllerSettings(BaseSettings, ControllerConfig):
    """
    Controller config read from the environment (or .env):
        QUEUE_SIDECAR_IMAGE, AUTOSCALER_PORT, CONCURRENCY_QUANTUM_OF_TIME,
        LOGGING_CONFIG, LOGGING_LEVEL, ENABLE_VAR_LOG_COLLECTION,
        FLUENTD_SIDECAR_IMAGE
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


class NetworkSettings(BaseSettings, NetworkConfig):
    """Network config read from ISTIO_OUTBOUND_IP_RANGES."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def _config_error(what: str, e: ValidationError) -> ConfigError:
    loc = e.errors()[0].get("loc") or ()
    key = str(loc[0]).upper() if loc else None
    return ConfigError(f"invalid {what} config: {e}", key=key)


def controller_config_from_env() -> ControllerConfig:
    """Unset variables fall back to the ControllerConfig defaults."""
    try:
        return ControllerSettings()
    except ValidationError as e:
        raise _config_error("controller", e) from e


def network_config_from_env() -> NetworkConfig:
    try:
        return NetworkSettings()
    except ValidationError as e:
        raise _config_error("network", e) from e


def network_config_from_configmap(data: Optional[Mapping[str, str]]) -> NetworkConfig:
    """
    Build the network config from config map data. The value is passed through
    as-is; range validation happens when the deployment is synthesized.
    """
    data = data or {}
    return NetworkConfig(istio_outbound_ip_ranges=data.get(ISTIO_OUTBOUND_IP_RANGES_KEY, ""))


@lru_cache()
def get_controller_config() -> ControllerConfig:
    return controller_config_from_env()


@lru_cache()
def get_network_config() -> NetworkConfig:
    return network_config_from_env()
