from blippmarket.simulation.portfolio import Portfolio, SimFill, SimRejection, SimulationResult
from blippmarket.simulation.runner import TradeOrder, parse_order, run_simulation

__all__ = [
    "Portfolio",
    "SimFill",
    "SimRejection",
    "SimulationResult",
    "TradeOrder",
    "parse_order",
    "run_simulation",
]
