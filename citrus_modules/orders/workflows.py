"""Order Workflows.

State machine for the order lifecycle:

    pending -> shipped -> delivered
                       -> returned

``delivered`` and ``returned`` are terminal.
"""

from citrus_kernel.domain.values import OrderStatus
from citrus_kernel.domain.workflow import Transition, Workflow
from citrus_kernel.exceptions import InvalidTransitionError
from citrus_kernel.logging_config import get_logger

logger = get_logger("modules.orders.workflows")


ORDER_WORKFLOW = Workflow(
    name="order",
    description="Order fulfilment lifecycle",
    initial_state=OrderStatus.PENDING.value,
    states=tuple(s.value for s in OrderStatus),
    transitions=(
        Transition(OrderStatus.PENDING.value, OrderStatus.SHIPPED.value, action="ship"),
        Transition(OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value, action="deliver"),
        Transition(OrderStatus.SHIPPED.value, OrderStatus.RETURNED.value, action="mark_returned"),
    ),
    terminal_states=(OrderStatus.DELIVERED.value, OrderStatus.RETURNED.value),
)

logger.info(
    "order_workflow_defined",
    extra={
        "workflow": ORDER_WORKFLOW.name,
        "states": list(ORDER_WORKFLOW.states),
        "transitions": [t.action for t in ORDER_WORKFLOW.transitions],
    },
)


def allowed_targets(current: OrderStatus) -> frozenset[OrderStatus]:
    """Statuses an order in ``current`` may move to next."""
    return frozenset(OrderStatus(s) for s in ORDER_WORKFLOW.targets_from(current.value))


def validate_transition(
    current: OrderStatus,
    requested: OrderStatus,
    order_id: str | None = None,
) -> Transition:
    """Return the workflow transition for ``current -> requested``.

    Raises:
        InvalidTransitionError: The pair is not in the transition table.
    """
    transition = ORDER_WORKFLOW.find_transition(current.value, requested.value)
    if transition is None:
        raise InvalidTransitionError(order_id, current.value, requested.value)
    return transition
