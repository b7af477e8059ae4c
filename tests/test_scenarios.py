from __future__ import annotations

from immutables import Map

from pyreduxlite import create_action, create_reducer, create_selector, create_store, on

CART_ADD_ITEM = "cart/addItem"
CART_REMOVE_ITEM = "cart/removeItem"


def test_counter_scenario() -> None:
    inc = create_action("inc")
    dec = create_action("dec")
    reducer = create_reducer(0, on(inc, lambda s, a: s + 1), on(dec, lambda s, a: s - 1))
    store = create_store(reducer)
    rounds = []
    store.subscribe(lambda: rounds.append(store.get_state()))

    for action in (inc(), inc(), dec()):
        store.dispatch(action)

    assert store.get_state() == 1
    assert rounds == [1, 2, 1]


def cart_reducer(state=None, action=None):
    if state is None:
        state = {"products": [], "cartItems": [], "wishList": []}
    if action["type"] == CART_ADD_ITEM:
        return {**state, "cartItems": [*state["cartItems"], action["payload"]]}
    if action["type"] == CART_REMOVE_ITEM:
        return {
            **state,
            "cartItems": [
                item for item in state["cartItems"]
                if item["productId"] != action["payload"]["productId"]
            ],
        }
    return state


def test_cart_scenario_keeps_relative_order() -> None:
    store = create_store(cart_reducer, config={"check_mutations": True})
    initial = store.get_state()

    for product_id in (1, 12, 6, 9):
        store.dispatch({"type": CART_ADD_ITEM, "payload": {"productId": product_id, "quantity": 1}})
    for product_id in (6, 9):
        store.dispatch({"type": CART_REMOVE_ITEM, "payload": {"productId": product_id}})

    assert [item["productId"] for item in store.get_state()["cartItems"]] == [1, 12]
    # 之前的狀態從未被修改
    assert initial["cartItems"] == []


def test_cart_with_persistent_state_and_selector() -> None:
    add_item = create_action(CART_ADD_ITEM, lambda product_id: {"productId": product_id, "quantity": 1})
    remove_item = create_action(CART_REMOVE_ITEM, lambda product_id: {"productId": product_id})
    reducer = create_reducer(
        Map(cartItems=()),
        on(add_item, lambda s, a: s.set("cartItems", s["cartItems"] + (a.payload,))),
        on(remove_item, lambda s, a: s.set(
            "cartItems",
            tuple(i for i in s["cartItems"] if i["productId"] != a.payload["productId"]),
        )),
    )
    get_ids = create_selector(lambda s: s["cartItems"], result_fn=lambda items: [i["productId"] for i in items])
    store = create_store(reducer)
    emitted = []
    store.select(get_ids).subscribe(on_next=emitted.append)

    for product_id in (1, 12, 6, 9):
        store.dispatch(add_item(product_id))
    for product_id in (6, 9):
        store.dispatch(remove_item(product_id))

    assert get_ids(store.get_state()) == [1, 12]
    assert emitted[0] == []
    assert emitted[-1] == [1, 12]


def test_posts_scenario_leaves_other_slices_untouched() -> None:
    initial = {"post": 0, "user": {"name": "Anurag Singh", "age": 26}, "status": "idle"}

    def reducer(state=None, action=None):
        if state is None:
            state = initial
        kind = action["type"]
        if kind == "post/increment":
            return {**state, "post": state["post"] + 1}
        if kind == "post/increaseBy":
            return {**state, "post": state["post"] + action["payload"]}
        if kind == "post/decreaseBy":
            return {**state, "post": state["post"] - action["payload"]}
        if kind == "app/setStatus":
            return {**state, "status": action["payload"]}
        return state

    store = create_store(reducer)
    for action in (
        {"type": "post/increment"},
        {"type": "post/increaseBy", "payload": 10},
        {"type": "post/decreaseBy", "payload": 3},
        {"type": "app/setStatus", "payload": "ready"},
    ):
        store.dispatch(action)

    assert store.get_state()["post"] == 8
    assert store.get_state()["status"] == "ready"
    assert store.get_state()["user"] is initial["user"]
