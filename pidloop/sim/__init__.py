"""Simulation package: stand-in plant and the host control loop."""
from pidloop.sim.plant import FirstOrderPlant
from pidloop.sim.simulator import SimulationOutput, Simulator

__all__ = ["FirstOrderPlant", "SimulationOutput", "Simulator"]
