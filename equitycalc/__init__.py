"""Equity Calc - Net proceeds of RSU and ESPP sales under Israeli tax rules."""

__version__ = "0.1.0"
