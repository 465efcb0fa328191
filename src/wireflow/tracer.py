"""
Debug tracing for edge routing.

When an EdgeRouter is created with ``debug=True`` it records one
RouteDecision per edge: which strategy produced the path, which detour
shape was chosen on each side, whether a port extension was pushed past an
obstacle, and any protected segments that still collide.

This is primarily useful for:
1. Understanding why a cable takes a particular detour
2. Finding edges that were skipped and why
3. Writing targeted tests against routing decisions

Usage:
    >>> router = EdgeRouter(debug=True)
    >>> result = router.route_all(layout)
    >>> trace = router.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("routing_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RouteDecision:
    """
    Record of how a single edge was routed.

    Attributes:
        edge_id: The edge this decision belongs to.
        outcome: "layout", "synthesized", "direct" or "failed".
        details: Free-form data about the decision (detour names, local
            obstacle counts, adjusted extension points, collisions, failure reason).
    """

    edge_id: str
    outcome: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"{key}={value}" for key, value in self.details.items()]
        suffix = f" ({', '.join(parts)})" if parts else ""
        return f"{self.edge_id}: {self.outcome}{suffix}"


@dataclass
class RouteTrace:
    """
    Complete trace of one routing pass.

    Attributes:
        decisions: One RouteDecision per routed or skipped edge.
        obstacle_count: Size of the obstacle index used for the pass.
    """

    decisions: List[RouteDecision] = field(default_factory=list)
    obstacle_count: int = 0

    def add_decision(self, edge_id: str, outcome: str, **details: Any) -> None:
        self.decisions.append(RouteDecision(edge_id, outcome, dict(details)))

    def get_decision(self, edge_id: str) -> Optional[RouteDecision]:
        """Get the decision recorded for an edge, if any."""
        for decision in self.decisions:
            if decision.edge_id == edge_id:
                return decision
        return None

    def get_decisions_by_outcome(self, outcome: str) -> List[RouteDecision]:
        return [d for d in self.decisions if d.outcome == outcome]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the obstacle count and the number of edges per
        outcome.
        """
        lines = [
            "=" * 60,
            "ROUTE TRACE SUMMARY",
            "=" * 60,
            "",
            f"Obstacles: {self.obstacle_count}",
            f"Edges: {len(self.decisions)}",
            "",
        ]

        outcome_counts: Dict[str, int] = {}
        for d in self.decisions:
            outcome_counts[d.outcome] = outcome_counts.get(d.outcome, 0) + 1

        lines.append("Edges by outcome:")
        for outcome, count in sorted(outcome_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {outcome}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Summary followed by every recorded decision."""
        lines = [self.summary(), "", "DECISIONS:", "-" * 40]
        lines.extend(str(d) for d in self.decisions)
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
