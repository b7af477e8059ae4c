"""
Store enhancer 定義模組。

Enhancer 是 ``create_store`` 唯一的擴充點：它接收 ``create_store``，返回一個簽名相同的
函數，通常用來包裹 Store 的 dispatch 以加入日誌、檢查等橫切功能。
Enhancer 必須保持 Store 的公開操作 (get_state、dispatch、subscribe 等) 不變。
"""
import contextlib
import datetime
import logging
from typing import Any, Callable, Dict, Generator, Optional

from .actions import is_action, get_action_type
from .errors import ErrorHandler, global_error_handler
from .store import Store
from .types import StoreCreator


def _describe(action: Any) -> str:
    if is_action(action):
        return str(get_action_type(action))
    return f"<malformed {type(action).__name__}>"


class LoggerEnhancer:
    """
    日誌 enhancer，記錄每個 action 發送前和發送後的 state。

    使用場景:
    - 偵錯時需要觀察每次 state 的變化。
    - 確保 action 的執行順序正確。

    範例:
        ```python
        store = create_store(reducer, LoggerEnhancer())
        ```
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        """
        Args:
            logger: 寫入日誌的 logger，預設為本模組的 logger
            level: action 日誌的等級
            error_handler: 處理 dispatch 失敗的錯誤處理器，預設為 global_error_handler
        """
        self.logger = logger or logging.getLogger(__name__)
        self.level = level
        self.error_handler = error_handler or global_error_handler

    def __call__(self, create_store: StoreCreator) -> StoreCreator:
        def enhanced_create_store(reducer: Callable[..., Any], preloaded_state: Any = None, **kwargs: Any) -> Store:
            store = create_store(reducer, preloaded_state, **kwargs)
            next_dispatch = store.dispatch

            def dispatch(action: Any) -> Any:
                with self.action_context(store, action) as context:
                    context['result'] = next_dispatch(action)
                    context['next_state'] = store.get_state()
                return context['result']

            # 以實例屬性覆蓋 dispatch，其餘操作保持原樣
            store.dispatch = dispatch  # type: ignore[method-assign]
            return store

        return enhanced_create_store

    @contextlib.contextmanager
    def action_context(self, store: Store, action: Any) -> Generator[Dict[str, Any], None, None]:
        """
        提供一個上下文管理器來處理 action 分發的生命週期。

        Yields:
            包含 action、前後狀態與結果的上下文字典
        """
        context: Dict[str, Any] = {
            'action': action,
            'prev_state': store.get_state(),
            'next_state': None,
            'result': None,
            'error': None,
            'timestamp': datetime.datetime.now(),
            'store_name': store.config.name,
        }
        self.on_next(context)
        try:
            yield context
        except Exception as err:
            context['error'] = err
            self.on_error(context)
            raise
        self.on_complete(context)

    def on_next(self, context: Dict[str, Any]) -> None:
        action_type = _describe(context['action'])
        self.logger.log(self.level, "[%s] ▶️ dispatching %s", context['store_name'], action_type)
        self.logger.log(self.level, "[%s] 🔄 state before %s: %r", context['store_name'], action_type, context['prev_state'])

    def on_complete(self, context: Dict[str, Any]) -> None:
        action_type = _describe(context['action'])
        self.logger.log(self.level, "[%s] ✅ state after %s: %r", context['store_name'], action_type, context['next_state'])

    def on_error(self, context: Dict[str, Any]) -> None:
        self.logger.log(
            self.level,
            "[%s] ❌ error in %s: %s",
            context['store_name'],
            _describe(context['action']),
            context['error'],
        )
        self.error_handler.handle(context['error'])
