import time
from typing import Any, Callable, List, Optional, Tuple


def create_selector(
    *selectors: Callable[[Any], Any],
    result_fn: Optional[Callable[..., Any]] = None,
    deep: bool = False,
    ttl: Optional[float] = None,
    maxsize: int = 128,
) -> Callable[[Any], Any]:
    """
    創建一個複合選擇器，支援記憶化、深淺比較與TTL控制

    只有當輸入選擇器的結果改變時才重新呼叫 ``result_fn``。
    選擇器或 ``result_fn`` 拋出的異常會原樣傳出。

    Args:
        *selectors: 多個輸入選擇器，這些函數會從 state 中提取對應的值
        result_fn: 處理輸出結果的函數，將多個選擇器的輸出進行處理
        deep: 是否進行深度比較（預設為 False，比較物件身分）
        ttl: 快取有效時間（秒），若超過此時間則重新計算，預設為無限
        maxsize: 緩存的最大條目數，預設為128

    Returns:
        經過快取優化的 selector 函數
    """
    if not selectors:
        raise TypeError("create_selector requires at least one input selector")
    if maxsize < 1:
        raise ValueError("maxsize must be at least 1")

    # 如果沒有 result_fn 且只有一個選擇器，直接返回該選擇器
    if result_fn is None and len(selectors) == 1:
        return selectors[0]

    if result_fn is None:
        result_fn = lambda *args: args

    cache: List[Tuple[float, Tuple[Any, ...], Any]] = []
    hits = 0
    misses = 0

    def selector(state: Any) -> Any:
        nonlocal cache, hits, misses

        inputs = tuple(select(state) for select in selectors)
        now = time.monotonic()

        if ttl is not None:
            cache = [item for item in cache if now - item[0] <= ttl]

        for _, cached_inputs, cached_result in reversed(cache):
            if _inputs_match(inputs, cached_inputs, deep):
                hits += 1
                return cached_result

        misses += 1
        result = result_fn(*inputs)
        while len(cache) >= maxsize:
            cache.pop(0)
        cache.append((now, inputs, result))
        return result

    def cache_info() -> Tuple[int, int, int, int]:
        return (hits, misses, maxsize, len(cache))

    def cache_clear() -> None:
        nonlocal hits, misses
        cache.clear()
        hits = misses = 0

    selector.cache_info = cache_info  # type: ignore[attr-defined]
    selector.cache_clear = cache_clear  # type: ignore[attr-defined]

    return selector


def _inputs_match(a: Tuple[Any, ...], b: Tuple[Any, ...], deep: bool) -> bool:
    if deep:
        return _deep_equals(a, b)
    return all(x is y for x, y in zip(a, b))


def _deep_equals(a: Any, b: Any) -> bool:
    """深度比較，容器類型不同時視為不相等"""
    if a is b:
        return True
    if type(a) != type(b):
        return False
    if isinstance(a, dict):
        if len(a) != len(b):
            return False
        return all(key in b and _deep_equals(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(_deep_equals(x, y) for x, y in zip(a, b))
    return a == b
