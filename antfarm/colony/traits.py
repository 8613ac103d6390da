"""Traits — tunable behaviour constants shared by every ant.

Traits hold the fixed timing, distance and probability parameters of
the digging state machine.  All ants in a colony share one instance;
tests and configs override individual values to force deterministic
behaviour (e.g. ``max_tunnel_preference=0.0``, ``downward_bias=1.0``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Traits:
    """Behaviour parameters for digging ants.

    Distances are in world units, times in the same units as the
    elapsed-time deltas fed to ``Ant.update`` (milliseconds in practice).

    Attributes:
        update_interval: Time between logical ticks.
        downward_bias: Probability of choosing a fresh roughly-downward
            heading instead of perturbing the current one.
        max_stuck_time: Consecutive blocked updates tolerated before the
            heading is randomised.
        base_movement_speed: Reported movement speed when not boosted.
        boost_multiplier: Aging and preference-growth multiplier while
            boosted.
        dig_distance: How far ahead the dig probe reaches.
        move_distance: How far ahead each new target point is placed.
        movement_smoothing: Fraction of the way toward the target
            covered per 16 time-units.
        max_tunnel_preference: Overall cap on tunnel-seek probability.
        age_preference_cap: Cap on the age-driven preference term.
        tunnel_preference_growth: Age-driven preference gained per age unit.
        depth_preference_cap: Cap on the depth-driven preference term.
        depth_preference_growth: Depth-driven preference gained per
            world unit below ``min_depth_for_preference``.
        min_depth_for_preference: Depth at which the depth term kicks in.
        base_search_radius: Tunnel-seek scan radius near the surface.
        search_depth_scale: Depth over which the scan radius grows by
            one base radius.
        search_step: Spacing of tunnel-seek sample points.
        dig_line_spacing: Spacing of corridor samples between positions.
        brush_radius: Corridor brush half-width in cells.
    """

    update_interval: float = 16.0
    downward_bias: float = 0.3
    max_stuck_time: int = 1
    base_movement_speed: float = 0.2
    boost_multiplier: int = 50

    dig_distance: float = 1.0
    move_distance: float = 1.0
    movement_smoothing: float = 0.1

    # Tunnel preference
    max_tunnel_preference: float = 0.5
    age_preference_cap: float = 0.4
    tunnel_preference_growth: float = 0.0001
    depth_preference_cap: float = 0.4
    depth_preference_growth: float = 0.002
    min_depth_for_preference: float = 100.0

    # Tunnel search
    base_search_radius: float = 20.0
    search_depth_scale: float = 200.0
    search_step: float = 2.0

    # Corridor digging
    dig_line_spacing: float = 2.0
    brush_radius: int = 1

    def __post_init__(self) -> None:
        """Reject parameters that would divide by zero mid-run.

        Raises:
            ValueError: If a tick interval, depth scale or sample spacing
                is not strictly positive.
        """
        for name in (
            "update_interval",
            "search_depth_scale",
            "search_step",
            "dig_line_spacing",
        ):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise ValueError(msg)
