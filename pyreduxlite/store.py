import itertools
import logging
import operator
import threading
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Union

import reactivex
from reactivex import Observable, operators as ops
from reactivex.disposable import Disposable

from .actions import Action, ActionTypes, get_action_type
from .config import StoreConfig, resolve_config
from .errors import ConfigurationError, ReentrantDispatchError, StateMutationError, StoreError
from .immutable_utils import snapshot
from .types import S, Listener, Reducer, StateSelector, StoreEnhancer, Unsubscribe

logger = logging.getLogger(__name__)


def _ensure_callable(value: Any, component: str, config_key: str) -> None:
    if not callable(value):
        raise ConfigurationError(
            f"Expected {config_key} to be callable, got {type(value).__name__}",
            component=component,
            config_key=config_key,
        )


def _reducer_name(reducer: Callable[..., Any]) -> str:
    return getattr(reducer, "__qualname__", None) or repr(reducer)


class Store(Generic[S]):
    """
    狀態容器，持有唯一的 state，並在每次狀態轉換後同步通知訂閱者。

    Store 是 state 唯一的持有者與修改者：
    - state 只能透過 dispatch 由 reducer 產生的新值取代，Store 從不就地修改它；
    - dispatch 依序執行 reducer、替換 state、通知 listener，整個過程不可被同一
      call stack 中的另一次 dispatch 打斷；
    - 所有操作都在同一把 RLock 之後序列化，因此可以在多執行緒之間共用。

    一般應使用 ``create_store`` 建立實例，而不是直接呼叫建構子。
    """

    def __init__(
        self,
        reducer: Reducer[S],
        preloaded_state: Optional[S] = None,
        config: Optional[Union[StoreConfig, Mapping[str, Any]]] = None,
    ) -> None:
        """
        Args:
            reducer: 純函式 ``(state, action) -> next_state``
            preloaded_state: 預載入的狀態；為 None 時以保留的 INIT action 呼叫 reducer 取得初始狀態
            config: StoreConfig 或可被驗證為 StoreConfig 的 mapping
        """
        _ensure_callable(reducer, "Store", "reducer")

        self._config = resolve_config(config)
        self._reducer = reducer
        self._state: Optional[S] = preloaded_state
        # listener id 單調遞增，dict 的插入順序即為訂閱順序
        self._listeners: Dict[int, Listener] = {}
        self._listener_ids = itertools.count()
        self._is_reducing = False
        self._is_notifying = False
        self._lock = threading.RLock()

        if preloaded_state is None:
            self.dispatch(Action(ActionTypes.INIT))
            logger.debug("%s initialised by reducer %s", self._config.name, _reducer_name(reducer))
        else:
            logger.debug("%s initialised from preloaded state", self._config.name)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def state(self) -> S:
        """當前狀態的快照，等同於 ``get_state()``。"""
        return self.get_state()

    def get_state(self) -> S:
        """
        返回當前已結算的狀態。

        在 reducer 執行期間呼叫會得到 dispatch 之前的狀態，永遠不會看到半套用的狀態。
        """
        with self._lock:
            return self._state

    def dispatch(self, action: Any) -> Any:
        """
        分發一個動作，觸發一次狀態轉換。

        Args:
            action: 帶有 ``type`` 判別欄位的 action

        Returns:
            傳入的 action 本身

        Raises:
            MalformedActionError: action 沒有 ``type``
            ReentrantDispatchError: 在本 Store 的 reducer 或 listener 執行期間呼叫
            StateMutationError: 啟用 check_mutations 且 reducer 就地修改了 state

        Reducer 與 listener 拋出的異常會原樣傳出。Reducer 失敗時 state 保持不變且不通知；
        listener 失敗時 state 已提交，本輪剩餘的 listener 不再被呼叫。
        """
        action_type = get_action_type(action)

        with self._lock:
            if self._is_reducing:
                raise ReentrantDispatchError(action_type, "reducing")
            if self._is_notifying:
                raise ReentrantDispatchError(action_type, "notifying listeners")

            prev_state = self._state
            baseline = snapshot(prev_state) if self._config.check_mutations else None

            self._is_reducing = True
            try:
                next_state = self._reducer(prev_state, action)
            except Exception:
                logger.debug("%s: reducer failed on %r, state unchanged", self._config.name, action_type)
                raise
            finally:
                self._is_reducing = False

            if baseline is not None and snapshot(prev_state) != baseline:
                raise StateMutationError(_reducer_name(self._reducer), action_type)

            self._state = next_state

            # 本輪只通知開始時已訂閱的 listener
            listeners = tuple(self._listeners.values())
            self._is_notifying = True
            try:
                for listener in listeners:
                    listener()
            finally:
                self._is_notifying = False

        return action

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        註冊一個無參數的 listener，在每次狀態轉換後被呼叫。

        同一個函式訂閱兩次會被呼叫兩次，各自由自己的 handle 取消。
        在 listener 中訂閱或取消訂閱是安全的，變更從下一輪通知開始生效。

        Args:
            listener: 無參數的回調函式

        Returns:
            取消訂閱的函式，可重複呼叫
        """
        _ensure_callable(listener, "Store", "listener")

        with self._lock:
            if self._is_reducing:
                raise StoreError("Cannot subscribe while the reducer is executing", operation="subscribe")
            listener_id = next(self._listener_ids)
            self._listeners[listener_id] = listener

        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            with self._lock:
                if not subscribed:
                    return
                if self._is_reducing:
                    raise StoreError("Cannot unsubscribe while the reducer is executing", operation="unsubscribe")
                subscribed = False
                del self._listeners[listener_id]

        return unsubscribe

    def replace_reducer(self, next_reducer: Reducer[S]) -> None:
        """
        替換 Store 使用的 reducer，並以保留的 REPLACE action 讓新 reducer 補齊狀態。

        Args:
            next_reducer: 新的 reducer
        """
        _ensure_callable(next_reducer, "Store", "reducer")

        with self._lock:
            if self._is_reducing or self._is_notifying:
                raise StoreError("Cannot replace the reducer during a dispatch", operation="replace_reducer")
            self._reducer = next_reducer
            logger.debug("%s: reducer replaced by %s", self._config.name, _reducer_name(next_reducer))
            self.dispatch(Action(ActionTypes.REPLACE))

    def select(self, selector: Optional[StateSelector[S, Any]] = None) -> Observable:
        """
        以 Observable 觀察狀態或狀態的一部分。

        訂閱時立即發出當前值，之後每輪通知發出一次；重複的值會被略過
        (未提供 selector 時比較物件身分，否則比較相等性)。

        Args:
            selector: 一個函數，接收整個狀態並返回希望觀察的部分。

        Returns:
            一個可觀察對象，發送選定的狀態部分。
        """
        def on_subscribe(observer, scheduler=None):
            def emit() -> None:
                observer.on_next(self.get_state())

            with self._lock:
                emit()
                return Disposable(self.subscribe(emit))

        source = reactivex.create(on_subscribe)

        if selector is None:
            return source.pipe(ops.distinct_until_changed(comparer=operator.is_))

        return source.pipe(
            ops.map(selector),
            ops.distinct_until_changed(),
        )

    def __repr__(self) -> str:
        return f"<Store name={self._config.name!r} listeners={len(self._listeners)}>"


def create_store(
    reducer: Reducer[S],
    preloaded_state: Any = None,
    enhancer: Optional[StoreEnhancer] = None,
    *,
    config: Optional[Union[StoreConfig, Mapping[str, Any]]] = None,
) -> Store[S]:
    """
    創建一個新的 Store 實例。

    第二個參數可以是預載入的狀態，也可以是 enhancer：當它是可呼叫物件且沒有提供
    第三個參數時，會被視為 enhancer。

    Args:
        reducer: 純函式 ``(state, action) -> next_state``
        preloaded_state: 可選的預載入狀態
        enhancer: 可選的 ``(create_store) -> create_store`` 包裹函式，例如日誌或檢查工具
        config: 可選的 StoreConfig

    Returns:
        Store: 新創建的 Store 實例，或 enhancer 返回的 Store。
    """
    if callable(preloaded_state) and callable(enhancer):
        raise ConfigurationError(
            "Passing several enhancers is not supported; compose them into a single function",
            component="create_store",
            config_key="enhancer",
        )

    if callable(preloaded_state) and enhancer is None:
        enhancer, preloaded_state = preloaded_state, None

    if enhancer is not None:
        _ensure_callable(enhancer, "create_store", "enhancer")
        return enhancer(create_store)(reducer, preloaded_state, config=config)

    return Store(reducer, preloaded_state, config=config)
