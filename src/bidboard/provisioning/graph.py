from __future__ import annotations

from collections.abc import Awaitable, Callable

from langgraph.graph import END, StateGraph

from bidboard.provisioning.nodes import (
    check_uniqueness_node,
    create_identity_node,
    create_profile_node,
    rollback_node,
    route_after_check,
    route_after_identity,
    route_after_profile,
)
from bidboard.provisioning.state import ProvisioningState
from bidboard.store.base import RemoteStore


def build_graph(*, store: RemoteStore):
    """
    Returns a compiled LangGraph runnable:

        check_uniqueness -> create_identity -> create_profile -> END
                 |                 |                 |
                END               END            rollback -> END
    """

    graph = StateGraph(ProvisioningState)

    graph.add_node("check_uniqueness", _bind_store(check_uniqueness_node, store))
    graph.add_node("create_identity", _bind_store(create_identity_node, store))
    graph.add_node("create_profile", _bind_store(create_profile_node, store))
    graph.add_node("rollback", _bind_store(rollback_node, store))

    graph.set_entry_point("check_uniqueness")

    graph.add_conditional_edges(
        "check_uniqueness",
        route_after_check,
        {"create_identity": "create_identity", END: END},
    )
    graph.add_conditional_edges(
        "create_identity",
        route_after_identity,
        {"create_profile": "create_profile", END: END},
    )
    graph.add_conditional_edges(
        "create_profile",
        route_after_profile,
        {"rollback": "rollback", END: END},
    )
    graph.add_edge("rollback", END)

    return graph.compile()


def _bind_store(
    fn: Callable[..., Awaitable[ProvisioningState]],
    store: RemoteStore,
) -> Callable[[ProvisioningState], Awaitable[ProvisioningState]]:
    async def _wrapped(state: ProvisioningState) -> ProvisioningState:
        return await fn(state, store=store)

    return _wrapped
