# pyreduxlite/immutable_utils.py
from typing import Any, FrozenSet, Type, TypeVar

from immutables import Map
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


def to_immutable(obj: Any) -> Any:
    """將任何對象轉換為不可變形式 (包括 Pydantic 模型)"""
    if isinstance(obj, BaseModel):
        return Map({k: to_immutable(v) for k, v in obj.model_dump().items()})
    elif isinstance(obj, (dict, Map)):
        return Map({k: to_immutable(v) for k, v in obj.items()})
    elif isinstance(obj, (list, tuple)):
        # 列表轉為元組
        return tuple(to_immutable(i) for i in obj)
    elif isinstance(obj, (set, frozenset)):
        return frozenset(to_immutable(i) for i in obj)
    return obj


def to_pydantic(map_obj: Map, model_class: Type[T]) -> T:
    """將 Map 轉換回 Pydantic 模型"""
    return model_class.model_validate(to_dict(map_obj))


def to_dict(obj: Any) -> Any:
    """將 Map 及其巢狀結構轉換為普通字典"""
    if isinstance(obj, Map):
        return {k: to_dict(v) for k, v in obj.items()}
    elif isinstance(obj, tuple):
        return [to_dict(i) for i in obj]
    elif isinstance(obj, frozenset):
        return {to_dict(i) for i in obj}
    return obj


def snapshot(obj: Any) -> Any:
    """
    建立一份與原物件脫鉤的不可變快照，用於偵測就地修改。

    與 ``to_immutable`` 不同，快照保留容器種類的差異 (list 與 tuple 不相等)，
    並會展開 ``__dict__`` 以涵蓋一般物件的屬性。

    自我參照的結構會在回到祖先容器時以 ``("<cycle>", 類型)`` 標記取代，
    不會無限遞迴。使用 ``__slots__`` 而沒有 ``__dict__`` 的物件按原樣返回，
    因此無法偵測它們的就地修改。
    """
    return _snapshot(obj, frozenset())


def _snapshot(obj: Any, ancestors: FrozenSet[int]) -> Any:
    if id(obj) in ancestors:
        return ("<cycle>", type(obj))
    path = ancestors | {id(obj)}
    if isinstance(obj, BaseModel):
        return (type(obj), _snapshot(obj.model_dump(), path))
    elif isinstance(obj, (dict, Map)):
        return (type(obj), Map({k: _snapshot(v, path) for k, v in obj.items()}))
    elif isinstance(obj, (list, tuple)):
        return (type(obj), tuple(_snapshot(i, path) for i in obj))
    elif isinstance(obj, (set, frozenset)):
        return (type(obj), frozenset(_snapshot(i, path) for i in obj))
    elif hasattr(obj, "__dict__") and not callable(obj):
        return (type(obj), _snapshot(vars(obj), path))
    return obj
