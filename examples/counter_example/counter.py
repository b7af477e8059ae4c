"""
最小的計數器範例：inc / dec 兩種 action，初始狀態 0。
"""
from pyreduxlite import create_action, create_reducer, create_store, on

# ============== 定義Actions ==============
inc = create_action("inc")
dec = create_action("dec")

# ============== 定義Reducer ==============
counter_reducer = create_reducer(
    0,
    on(inc, lambda state, action: state + 1),
    on(dec, lambda state, action: state - 1),
)


if __name__ == "__main__":
    store = create_store(counter_reducer)
    store.subscribe(lambda: print(f"計數變化: {store.get_state()}"))

    for action in (inc(), inc(), dec()):
        store.dispatch(action)

    print(f"最終狀態: {store.state}")
