"""
購物車範例：以 immutables.Map 與 tuple 表示狀態，加入與移除商品。
"""
from immutables import Map

from pyreduxlite import create_action, create_reducer, create_selector, create_store, on

# ============== 定義初始狀態 ==============
initial_state = Map(
    products=(
        Map(id=1, title="Backpack", price=109.95),
        Map(id=6, title="Gold Ring", price=168.0),
        Map(id=9, title="Hard Drive", price=64.0),
        Map(id=12, title="Monitor", price=599.0),
    ),
    cartItems=(),
    wishList=(),
)

# ============== 定義Actions ==============
cart_add_item = create_action("cart/addItem", lambda product_id, quantity=1: {"productId": product_id, "quantity": quantity})
cart_remove_item = create_action("cart/removeItem", lambda product_id: {"productId": product_id})


# ============== 定義Reducer ==============
def handle_add_item(state, action):
    return state.set("cartItems", state["cartItems"] + (action.payload,))


def handle_remove_item(state, action):
    product_id = action.payload["productId"]
    return state.set(
        "cartItems",
        tuple(item for item in state["cartItems"] if item["productId"] != product_id),
    )


cart_reducer = create_reducer(
    initial_state,
    on(cart_add_item, handle_add_item),
    on(cart_remove_item, handle_remove_item),
)

# ============== 定義Selectors ==============
get_products = lambda state: state["products"]
get_cart_items = lambda state: state["cartItems"]
get_cart_product_ids = create_selector(
    get_cart_items, result_fn=lambda items: [item["productId"] for item in items]
)
get_cart_total = create_selector(
    get_products,
    get_cart_items,
    result_fn=lambda products, items: sum(
        product["price"] * item["quantity"]
        for item in items
        for product in products
        if product["id"] == item["productId"]
    ),
)


if __name__ == "__main__":
    store = create_store(cart_reducer)
    store.select(get_cart_product_ids).subscribe(lambda ids: print(f"購物車: {ids}"))

    for product_id in (1, 12, 6, 9):
        store.dispatch(cart_add_item(product_id))
    for product_id in (6, 9):
        store.dispatch(cart_remove_item(product_id))

    print(f"總價: {get_cart_total(store.state):.2f}")
