"""Flat capital gains tax on price appreciation."""

from ..amounts import to_amount
from .schemas import TaxConfiguration


def calc_capital_gains_tax(config: TaxConfiguration, gain: float) -> float:
    """Capital gains tax on a gain; losses and zero gains owe nothing.

    A loss is not a deduction here: it does not offset any other tax.
    """
    gain = to_amount(gain)
    if gain <= 0:
        return 0.0
    return gain * config.capital_gains_rate
