"""Equity Compass: tax modelling for RSU and ISO compensation."""

__version__ = "0.1.0"
