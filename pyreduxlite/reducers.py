from typing import Any, Dict, Optional, Union, Tuple

from .actions import get_action_type
from .types import S, ActionHandler, ActionCreator, HandlerMap, Reducer


def create_reducer(initial_state: S, *handlers: Union[Tuple[Any, ActionHandler], HandlerMap]) -> Reducer[S]:
    """
    創建一個 reducer 函式，依 action 的 ``type`` 選擇對應的處理函式。

    未註冊的 action 類型（包括 Store 保留的內部類型）會原樣返回傳入的 state 物件，
    使呼叫端可以用 ``is`` 判斷狀態是否改變。

    Args:
        initial_state: 初始狀態，state 為 None 時使用。
        *handlers: 一系列 (action_type, handler_fn) 元組或使用 on 函式創建的處理器。

    Returns:
        一個 reducer 函式，根據 action 的類型執行對應的處理邏輯。
    """
    action_handlers: Dict[Any, ActionHandler] = {}

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            action_type, handler_fn = handler
            action_handlers[action_type] = handler_fn
        elif isinstance(handler, dict):
            action_handlers.update(handler)
        else:
            raise TypeError(
                f"Reducer handlers must be (type, fn) tuples or on(...) results, got {handler!r}"
            )

    def reducer(state: Optional[S] = None, action: Any = None) -> S:
        if state is None:
            state = initial_state
        if action is None:
            return state

        handler = action_handlers.get(get_action_type(action))
        if handler is None:
            return state
        return handler(state, action)

    # 設置 reducer 的初始狀態和處理器映射
    reducer.initial_state = initial_state  # type: ignore[attr-defined]
    reducer.handlers = action_handlers  # type: ignore[attr-defined]

    return reducer


def on(action_creator_or_type: Union[ActionCreator, str], handler: ActionHandler) -> HandlerMap:
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_creator_or_type: Action 創建器函式或 Action 類型字串。
        handler: 處理該 Action 的函式，接收 (state, action) 並返回新狀態。

    Returns:
        一個包含 {action_type: handler} 的字典。
    """
    if callable(action_creator_or_type) and hasattr(action_creator_or_type, 'type'):
        action_type = action_creator_or_type.type
    else:
        action_type = action_creator_or_type

    return {action_type: handler}
