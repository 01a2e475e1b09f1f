"""
Domain-specific type aliases for the WarPlan simulator.

These exist to make signatures self-documenting rather than for runtime
checking. A parameter typed as EventName is one of the hook points the
Tracer fires, not an arbitrary string.
"""

from typing import Literal, TypeAlias

# Hook points fired by the combat engine when a Tracer is attached. Handlers
# registered in Tracer.events under these names receive the matching record.
EventName: TypeAlias = Literal[
    "attack_started",
    "round_resolved",
    "territory_conquered",
    "vector_exhausted",
    "attack_finished",
]

# How bonus allocations are enumerated. "product" walks every counter value
# in 0..bonus for every vector and filters by sum; "direct" only yields the
# allocations that already sum to the bonus pool.
Strategy: TypeAlias = Literal["product", "direct"]

# "simulate" just predicts each vector as given; "plan" searches bonus splits.
Mode: TypeAlias = Literal["simulate", "plan"]
