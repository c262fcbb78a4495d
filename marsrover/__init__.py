"""
Mars Rover - Rovers on a rectangular, optionally relativistic, plateau.

A deterministic, event-driven engine for placing and driving rovers:
- Plateau occupancy tracking with bounds checks
- Rover turn/move state machine
- Relativistic contraction of the observed plateau size
- Apply-then-publish domain events with rollback
- Optimistic version checks on rover updates
"""

__version__ = "0.1.0"
