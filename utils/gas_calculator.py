"""
Gas Calculator
Offer price for the deployment transaction: network price plus a 5% buffer
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from loguru import logger


DEFAULT_GAS_PRICE_MULTIPLIER = Decimal('1.05')


def compute_offer_price(
    network_gas_price: int,
    multiplier: Union[Decimal, str, float] = DEFAULT_GAS_PRICE_MULTIPLIER
) -> int:
    """
    Scale the network gas price and truncate to whole wei

    Args:
        network_gas_price: Current network gas price in wei
        multiplier: Buffer multiplier (1.05 = 5% above network)

    Returns:
        Offer gas price in wei
    """
    if network_gas_price < 0:
        raise ValueError(f"Gas price cannot be negative: {network_gas_price}")

    # Exact ratio: floats drift at wei magnitudes
    numerator, denominator = Decimal(str(multiplier)).as_integer_ratio()
    return int(network_gas_price) * numerator // denominator


@dataclass(frozen=True)
class GasQuote:
    """Network gas price and the price offered for the deployment"""
    network_gas_price: int
    multiplier: Decimal = DEFAULT_GAS_PRICE_MULTIPLIER

    @property
    def offer_price(self) -> int:
        """Buffered gas price in wei"""
        return compute_offer_price(self.network_gas_price, self.multiplier)


async def get_gas_quote(provider, multiplier=DEFAULT_GAS_PRICE_MULTIPLIER) -> GasQuote:
    """
    Sample network gas price

    Args:
        provider: LedgerProvider
        multiplier: Buffer multiplier

    Returns:
        GasQuote
    """
    network_gas_price = await provider.get_gas_price()
    quote = GasQuote(network_gas_price=network_gas_price, multiplier=Decimal(str(multiplier)))

    logger.debug(
        f"Network gas price: {network_gas_price} wei, "
        f"offer: {quote.offer_price} wei (x{quote.multiplier})"
    )

    return quote
