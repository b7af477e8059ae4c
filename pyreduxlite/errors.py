"""
PyReduxLite 錯誤處理模組。

定義所有由 Store 拋出的異常類型，以及集中式的錯誤處理器。
Reducer 或 listener 自身拋出的異常不會被包裝，會原樣傳回 dispatch 的呼叫者。
"""
import logging
import traceback
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class PyReduxLiteError(Exception):
    """所有 PyReduxLite 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """
        將錯誤轉換為可序列化的字典。

        Returns:
            包含錯誤類型、訊息與細節的字典。
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({details})"


class ActionError(PyReduxLiteError):
    """與 Action 相關的錯誤。"""

    def __init__(self, message: str, action_type: Any = None, payload: Any = None, **kwargs: Any) -> None:
        details = {"action_type": action_type, **kwargs}
        if payload is not None:
            details["payload"] = payload
        super().__init__(message, details)
        self.action_type = action_type
        self.payload = payload


class MalformedActionError(ActionError):
    """Action 缺少 type 判別欄位。"""

    def __init__(self, action: Any) -> None:
        super().__init__(
            "Actions must carry a 'type' discriminator; "
            f"got {type(action).__name__} without one",
            action_type=None,
            received=repr(action),
        )
        self.action = action


class StoreError(PyReduxLiteError):
    """與 Store 相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        super().__init__(message, {"operation": operation, **kwargs})
        self.operation = operation


class ReentrantDispatchError(StoreError):
    """在同一個 Store 的 reducer 或 listener 執行期間再次 dispatch。"""

    def __init__(self, action_type: Any, phase: str) -> None:
        super().__init__(
            f"Cannot dispatch while the store is {phase}",
            operation="dispatch",
            action_type=action_type,
            phase=phase,
        )
        self.phase = phase


class ReducerError(PyReduxLiteError):
    """與 Reducer 相關的錯誤。"""

    def __init__(self, message: str, reducer_name: str, action_type: Any, state: Any = None, **kwargs: Any) -> None:
        details = {"reducer_name": reducer_name, "action_type": action_type, **kwargs}
        if state is not None:
            details["state"] = state
        super().__init__(message, details)
        self.reducer_name = reducer_name
        self.action_type = action_type


class StateMutationError(ReducerError):
    """Reducer 就地修改了傳入的 state。"""

    def __init__(self, reducer_name: str, action_type: Any) -> None:
        super().__init__(
            "Reducer mutated its state argument in place; return a new value instead",
            reducer_name=reducer_name,
            action_type=action_type,
        )


class ConfigurationError(PyReduxLiteError):
    """配置相關的錯誤。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any) -> None:
        details = {"component": component, **kwargs}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key


class ErrorHandler:
    """
    集中式錯誤處理器，用於日誌記錄和錯誤報告。

    錯誤交由 ``logging`` 記錄，之後依序呼叫已註冊的處理函數。
    處理器只負責報告，不會吞掉異常：呼叫端仍需自行重新拋出。
    """

    def __init__(self, log_to_console: bool = True, log_to_file: bool = False, log_file: Optional[str] = None) -> None:
        """
        Args:
            log_to_console: 是否將錯誤寫入模組 logger
            log_to_file: 是否額外寫入檔案
            log_file: 檔案路徑，``log_to_file`` 為 True 時必填
        """
        if log_to_file and not log_file:
            raise ConfigurationError(
                "log_file is required when log_to_file is enabled",
                component="ErrorHandler",
                config_key="log_file",
            )
        self.log_to_console = log_to_console
        self.log_to_file = log_to_file
        self.log_file = log_file
        self.handlers: List[Callable[[PyReduxLiteError], None]] = []
        self._file_logger: Optional[logging.Logger] = None
        self._file_handler: Optional[logging.FileHandler] = None
        if log_to_file:
            self._file_handler = logging.FileHandler(log_file, encoding="utf-8")
            self._file_logger = logging.getLogger(f"{__name__}.file.{id(self)}")
            self._file_logger.addHandler(self._file_handler)
            self._file_logger.propagate = False

    def register_handler(self, handler: Callable[[PyReduxLiteError], None]) -> None:
        """註冊一個錯誤處理函數。"""
        self.handlers.append(handler)

    def handle(self, error: Union[PyReduxLiteError, Exception]) -> None:
        """
        記錄並分發錯誤。

        非 PyReduxLiteError 的異常會先包裝成 PyReduxLiteError 再交給處理函數。

        Args:
            error: 要處理的錯誤
        """
        if not isinstance(error, PyReduxLiteError):
            error = PyReduxLiteError(
                str(error),
                {"original_type": error.__class__.__name__},
            )

        if self.log_to_console:
            logger.error("%s: %s", error.__class__.__name__, error)
        if self._file_logger is not None:
            self._file_logger.error("%s: %s", error.__class__.__name__, error)

        for handler in self.handlers:
            handler(error)

    def close(self) -> None:
        """關閉檔案日誌並釋放檔案句柄。重複呼叫不會出錯。"""
        if self._file_handler is not None:
            if self._file_logger is not None:
                self._file_logger.removeHandler(self._file_handler)
            self._file_handler.close()
        self._file_handler = None
        self._file_logger = None


# 單例錯誤處理器
global_error_handler = ErrorHandler()
