"""
Store 配置。
"""
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


class StoreConfig(BaseModel):
    """
    Store 的可選配置。

    Attributes:
        name: Store 名稱，用於日誌與 repr
        check_mutations: 開發用檢查，每次 reducer 執行前後比較 state 快照，
            偵測到就地修改時拋出 StateMutationError
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="store", min_length=1)
    check_mutations: bool = False


def resolve_config(config: Optional[Union[StoreConfig, Mapping[str, Any]]]) -> StoreConfig:
    """
    將使用者傳入的配置正規化為 StoreConfig。

    Args:
        config: None、StoreConfig 實例或可被驗證的 mapping

    Returns:
        StoreConfig 實例

    Raises:
        ConfigurationError: 配置無法通過驗證
    """
    if config is None:
        return StoreConfig()
    if isinstance(config, StoreConfig):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"config must be a StoreConfig or a mapping, got {type(config).__name__}",
            component="Store",
            config_key="config",
        )
    try:
        return StoreConfig.model_validate(dict(config))
    except ValidationError as err:
        raise ConfigurationError(
            f"Invalid store config: {err.error_count()} error(s)",
            component="Store",
            errors=err.errors(include_url=False),
        ) from err
