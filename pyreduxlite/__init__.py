"""
PyReduxLite: 一個可預測的狀態容器。

單一 Store 持有不可變的狀態樹，只能透過 dispatch 交由純函式 reducer 產生新狀態，
並在每次轉換後同步通知訂閱者。
"""

from .errors import (
    PyReduxLiteError, ActionError, MalformedActionError, StoreError,
    ReentrantDispatchError, ReducerError, StateMutationError,
    ConfigurationError, ErrorHandler, global_error_handler
)
from .actions import Action, ActionTypes, create_action, get_action_type, is_action
from .config import StoreConfig
from .reducers import create_reducer, on
from .store import Store, create_store
from .enhancers import LoggerEnhancer
from .store_selectors import create_selector
from .immutable_utils import to_immutable, to_dict, to_pydantic

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "PyReduxLiteError", "ActionError", "MalformedActionError", "StoreError",
    "ReentrantDispatchError", "ReducerError", "StateMutationError",
    "ConfigurationError", "ErrorHandler", "global_error_handler",

    # Actions
    "Action", "ActionTypes", "create_action", "get_action_type", "is_action",

    # Config
    "StoreConfig",

    # Reducers
    "create_reducer", "on",

    # Store
    "Store", "create_store",

    # Enhancers
    "LoggerEnhancer",

    # Selectors
    "create_selector",

    # Immutable Utils
    "to_immutable", "to_dict", "to_pydantic",
]
