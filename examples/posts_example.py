"""
帖子計數範例：以純函式 reducer 處理多種 action，並透過 LoggerEnhancer 觀察每次 dispatch。
"""
import logging

from pyreduxlite import LoggerEnhancer, create_store

# ============== 定義初始狀態 ==============
initial_state = {
    "post": 0,
    "user": {"name": "Anurag Singh", "age": 26},
    "status": "idle",
}

# ============== 定義 Action 類型 ==============
INCREMENT = "post/increment"
DECREMENT = "post/decrement"
INCREASE_BY = "post/increaseBy"
DECREASE_BY = "post/decreaseBy"
SET_STATUS = "app/setStatus"


# ============== 定義Reducer ==============
def reducer(state=None, action=None):
    if state is None:
        state = initial_state

    action_type = action["type"]
    if action_type == INCREMENT:
        return {**state, "post": state["post"] + 1}
    if action_type == DECREMENT:
        return {**state, "post": state["post"] - 1}
    if action_type == INCREASE_BY:
        return {**state, "post": state["post"] + action["payload"]}
    if action_type == DECREASE_BY:
        return {**state, "post": state["post"] - action["payload"]}
    if action_type == SET_STATUS:
        return {**state, "status": action["payload"]}
    # 未知的 action 返回原狀態
    return state


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s")

    store = create_store(reducer, LoggerEnhancer(), config={"name": "posts"})

    def render():
        current = store.get_state()
        print(f"--- State Updated --- post={current['post']} status={current['status']}")

    store.subscribe(render)

    print("Initial State:", store.get_state())
    store.dispatch({"type": INCREMENT})
    store.dispatch({"type": INCREMENT})
    store.dispatch({"type": DECREMENT})
    store.dispatch({"type": INCREASE_BY, "payload": 10})
    store.dispatch({"type": DECREASE_BY, "payload": 3})
    store.dispatch({"type": SET_STATUS, "payload": "loading"})
    store.dispatch({"type": INCREMENT})
    store.dispatch({"type": SET_STATUS, "payload": "ready"})
    print("Final State:", store.get_state())
