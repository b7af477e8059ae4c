"""
PyReduxLite 共用的類型定義。
"""
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from typing_extensions import Protocol

S = TypeVar("S")  # 狀態類型
P = TypeVar("P")  # 負載類型
T = TypeVar("T")  # 選擇結果類型
P_co = TypeVar("P_co", covariant=True)

Reducer = Callable[[Optional[S], Any], S]
ActionHandler = Callable[[S, Any], S]
HandlerMap = Dict[Any, ActionHandler]

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]

StateSelector = Callable[[S], T]

# create_store 的形狀，以及包裹它的 enhancer
StoreCreator = Callable[..., Any]
StoreEnhancer = Callable[[StoreCreator], StoreCreator]


class ActionCreatorWithoutPayload(Protocol):
    """無負載的 Action 生成器。"""

    type: str

    def __call__(self) -> Any: ...


class ActionCreatorWithPayload(Protocol[P_co]):
    """帶負載的 Action 生成器。"""

    type: str

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


ActionCreator = Union[ActionCreatorWithoutPayload, ActionCreatorWithPayload[Any]]
