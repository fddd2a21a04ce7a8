"""EnergyLens: meter readings, consumption analytics and projections."""

__version__ = "0.1.0"
