"""
Rice Cooker - Household Appliance Simulator

Simulates a household rice cooker driven from a text menu. Tracks power,
ingredients and the cooking cycle, and runs a cooking countdown that stops
the cycle automatically when time runs out.
"""

__version__ = "0.1.0"
__author__ = "Rice Cooker Team"
