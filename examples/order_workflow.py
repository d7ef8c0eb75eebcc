from __future__ import annotations

from dataclasses import dataclass, field

from stateful import (
    ALL_STATES,
    Context,
    DefaultParams,
    Err,
    Ok,
    State,
    TransitionNotFoundError,
    Transition,
    create_state_machine,
)
from stateful.adapters.graph import DotSourceRenderer

CREATED = State("created")
PAID = State("paid")
SHIPPED = State("shipped")
CANCELLED = State("cancelled")


@dataclass
class Order:
    order_id: str
    state: State = CREATED
    history: list[State] = field(default_factory=list)

    def get_id(self) -> str:
        return self.order_id

    def get_state(self) -> State:
        return self.state

    def set_state(self, ctx: Context, state: State, params: DefaultParams, /) -> None:
        self.history.append(self.state)
        self.state = state


def _pay(ctx: Context, order: Order, params: DefaultParams) -> Ok[None] | Err[Exception]:
    amount = params.get_as("amount", float)
    if amount.is_err():
        return amount
    print(f"charging {order.get_id()}: {amount.unwrap():.2f}")
    return Ok(None)


def _ship_all(ctx: Context, orders: list[Order], params: DefaultParams) -> None:
    ids = ", ".join(order.get_id() for order in orders)
    print(f"booking one truck for: {ids}")


def _cancel(ctx: Context, order: Order, params: DefaultParams) -> None:
    print(f"cancelling {order.get_id()}")


machine = create_state_machine(
    [
        Transition("pay", [CREATED], PAID, _pay),
        Transition("ship", [PAID], SHIPPED, batch_action=_ship_all),
        Transition("cancel", [ALL_STATES], CANCELLED, _cancel),
    ],
    renderer=DotSourceRenderer(),
)

orders = [Order(f"order-{n}") for n in range(3)]
for order in orders:
    machine.run(order, PAID, DefaultParams(amount="19.90"))

with Context.background().with_timeout(5) as ctx:
    machine.batch_run(orders, SHIPPED, ctx=ctx)

try:
    machine.run(orders[0], PAID)
except TransitionNotFoundError as exc:
    print(f"refused: {exc}")

machine.run(orders[1], CANCELLED)
print({order.get_id(): str(order.get_state()) for order in orders})

machine.graph("order_workflow.dot")
print(machine.to_dot())
