"""
基於 PyReduxLite 的 Action 定義模組。

此模組提供 Action 類別、創建 Action 的功能，以及 Store 保留的內部 Action 類型。
Actions 是描述狀態變更意圖的不可變對象，至少需要一個 ``type`` 判別欄位。
"""
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Dict, Generic, Optional, Union, overload

from .errors import MalformedActionError
from .immutable_utils import to_immutable
from .types import P, ActionCreator, ActionCreatorWithoutPayload, ActionCreatorWithPayload


class Action(Generic[P]):
    """
    表示一個有類型和可選負載的動作。

    泛型參數:
        P: 負載的類型

    屬性:
        type: 動作的類型字符串
        payload: 動作的負載數據（可選），dict/list/set 會被轉換為不可變結構

    其他類型的負載需可雜湊，Action 才能被雜湊。
    """
    __slots__ = ('type', 'payload')

    def __init__(self, type: str, payload: Optional[P] = None):
        super().__setattr__('type', type)
        super().__setattr__('payload', _process_payload(payload))

    def __setattr__(self, name, value):
        if name not in self.__slots__:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Cannot delete immutable instance attribute '{name}'")

    # 讓以 action["type"] 風格撰寫的 reducer 也能處理 Action 物件
    def __getitem__(self, key: str) -> Any:
        if key not in self.__slots__:
            raise KeyError(key)
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self.__slots__:
            return default
        return getattr(self, key)

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.type == other.type and self.payload == other.payload

    def __hash__(self):
        return hash((self.type, self.payload))

    def __repr__(self):
        return f"Action(type={self.type!r}, payload={self.payload!r})"


def _random_suffix() -> str:
    return uuid.uuid4().hex[:7]


class ActionTypes:
    """
    Store 保留的內部 Action 類型。

    類型字串帶有隨機後綴，應用程式不應依賴或自行 dispatch 這些類型；
    reducer 只需對未知類型返回原狀態即可正確處理它們。
    """
    INIT: str = f"@@pyreduxlite/INIT.{_random_suffix()}"
    REPLACE: str = f"@@pyreduxlite/REPLACE.{_random_suffix()}"


def get_action_type(action: Any) -> Any:
    """
    讀取 action 的判別欄位。

    支援 ``Action``、帶有 ``"type"`` 鍵的 mapping，以及任何帶 ``type`` 屬性的物件
    (例如 pydantic 模型)。

    Args:
        action: 要檢查的 action

    Returns:
        action 的類型值

    Raises:
        MalformedActionError: action 沒有判別欄位，或其值為 None
    """
    if isinstance(action, Mapping):
        action_type = action.get("type")
    elif isinstance(action, type) or callable(action):
        # 類別與 action 生成器本身不是 action，即使它們帶有 type 屬性
        action_type = None
    else:
        action_type = getattr(action, "type", None)

    if action_type is None:
        raise MalformedActionError(action)
    return action_type


def _process_payload(payload: Any) -> Any:
    """將 mapping/list 負載轉換為不可變結構。"""
    if isinstance(payload, (dict, list, set)):
        return to_immutable(payload)
    return payload


@overload
def create_action(action_type: str) -> ActionCreatorWithoutPayload:
    ...


@overload
def create_action(action_type: str, prepare_fn: Callable[..., P]) -> ActionCreatorWithPayload[P]:
    ...


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> ActionCreator:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action

    範例:
        >>> increment = create_action("counter/increment")
        >>> increment()
        Action(type='counter/increment', payload=None)
        >>> add = create_action("counter/add", lambda amount: amount)
        >>> add(5)
        Action(type='counter/add', payload=5)
    """
    if not action_type:
        raise MalformedActionError(action_type)

    def action_creator(*args: Any, **kwargs: Any) -> Action[Any]:
        if prepare_fn:
            return Action(action_type, prepare_fn(*args, **kwargs))
        elif len(args) == 1 and not kwargs:
            return Action(action_type, args[0])
        elif args or kwargs:
            payload: Dict[Union[int, str], Any] = dict(zip(range(len(args)), args))
            payload.update(kwargs)
            return Action(action_type, payload)

        return Action(action_type)

    # 添加 type 屬性以便於識別
    action_creator.type = action_type  # type: ignore[attr-defined]
    action_creator.__name__ = f"create_{action_type}"

    return action_creator


def is_action(value: Any) -> bool:
    """判斷一個值是否具有可被 dispatch 的形狀。"""
    try:
        get_action_type(value)
    except MalformedActionError:
        return False
    return True
