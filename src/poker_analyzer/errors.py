"""Exceptions raised by the equity simulator and analysis engine."""


class InvalidInputError(ValueError):
    """Input that cannot be evaluated: duplicate cards, bad counts, zero pot."""


class SimulationCancelled(Exception):
    """A simulation was stopped before all requested iterations ran.

    No equity is reported for a cancelled run.
    """

    def __init__(self, completed: int, requested: int):
        super().__init__(f"Simulation cancelled after {completed} of {requested} iterations")
        self.completed = completed
        self.requested = requested
