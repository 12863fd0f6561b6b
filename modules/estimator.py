"""Print cost estimation and token-fee quotes."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, Union

from models.print_settings import ColorMode, Quality, PrintSettings, TokenType, parse_choice
from logging_config import get_logger


logger = get_logger(__name__)

# Currency units per printed page
BASE_PRICE_PER_PAGE = {
    ColorMode.COLOR: Decimal("0.25"),
    ColorMode.BLACK_AND_WHITE: Decimal("0.10"),
}

QUALITY_MULTIPLIERS = {
    Quality.HIGH: Decimal("1.5"),
    Quality.STANDARD: Decimal("1.0"),
    Quality.DRAFT: Decimal("0.8"),
}

# Double-sided printing gets 10% off
DUPLEX_DISCOUNT = Decimal("0.9")

_CENT = Decimal("0.01")


def estimate(
    pages: int,
    color_mode: Union[ColorMode, str],
    quality: Union[Quality, str],
    duplex: bool,
    copies: int,
) -> float:
    """
    Price of a print job.

    price = pages x base_per_page x quality_multiplier x duplex_discount x copies,
    rounded half-up to 2 decimals. Computed in Decimal so that e.g.
    10 B&W duplex pages give exactly 0.90.

    Pure: no I/O, no configuration. Callers validate that pages >= 0 and
    copies >= 1 before calling.
    """
    color_mode = parse_choice(ColorMode, color_mode, "colorMode")
    quality = parse_choice(Quality, quality, "quality")

    price = (
        Decimal(pages)
        * BASE_PRICE_PER_PAGE[color_mode]
        * QUALITY_MULTIPLIERS[quality]
        * (DUPLEX_DISCOUNT if duplex else Decimal(1))
        * Decimal(copies)
    )
    return float(price.quantize(_CENT, rounding=ROUND_HALF_UP))


class PriceQuoter:
    """
    Builds the price shown to a user before confirming a job.

    The quote is the canonical estimate() plus a flat fee for priority
    tokens. The fee is kept out of estimate() so that the per-page price
    stays reproducible from the print settings alone.
    """

    def __init__(self, priority_token_fee: float = 1.50, currency: str = "INR") -> None:
        self.priority_token_fee = Decimal(str(priority_token_fee))
        self.currency = currency

    def token_fee(self, token_type: Union[TokenType, str]) -> float:
        token_type = parse_choice(TokenType, token_type, "tokenType")
        if token_type is TokenType.PRIORITY:
            return float(self.priority_token_fee.quantize(_CENT, rounding=ROUND_HALF_UP))
        return 0.0

    def quote(
        self,
        pages: int,
        settings: PrintSettings,
        token_type: Union[TokenType, str] = TokenType.NORMAL,
    ) -> Dict[str, Any]:
        """
        Quote a job.

        Args:
            pages: Pages per copy (the document's estimated pages)
            settings: Validated print settings
            token_type: Normal or priority token

        Returns:
            Dictionary with subtotal, tokenFee, total, currency and a
            human-readable reasoning string
        """
        token_type = parse_choice(TokenType, token_type, "tokenType")
        subtotal = estimate(
            pages=pages,
            color_mode=settings.color_mode,
            quality=settings.quality,
            duplex=settings.duplex,
            copies=settings.copies,
        )
        fee = self.token_fee(token_type)
        total = float((Decimal(str(subtotal)) + Decimal(str(fee))).quantize(_CENT, rounding=ROUND_HALF_UP))

        logger.debug(
            f"Quote: pages={pages}, copies={settings.copies}, color={settings.color_mode.value}, "
            f"quality={settings.quality.value}, duplex={settings.duplex}, token={token_type.value} "
            f"-> {subtotal} + {fee} = {total}"
        )

        return {
            "pages": pages,
            "copies": settings.copies,
            "billablePages": pages * settings.copies,
            "subtotal": subtotal,
            "tokenType": token_type.value,
            "tokenFee": fee,
            "total": total,
            "currency": self.currency,
            "reasoning": self._build_reasoning(settings, token_type),
        }

    def _build_reasoning(self, settings: PrintSettings, token_type: TokenType) -> str:
        color_desc = {
            ColorMode.COLOR: "Color pages are 0.25 each.",
            ColorMode.BLACK_AND_WHITE: "Black & white pages are 0.10 each.",
        }
        quality_desc = {
            Quality.HIGH: "High quality adds 50%.",
            Quality.STANDARD: "",
            Quality.DRAFT: "Draft quality saves 20%.",
        }

        parts = [
            color_desc[settings.color_mode],
            quality_desc[settings.quality],
            "Double-sided printing saves 10%." if settings.duplex else "",
        ]
        if token_type is TokenType.PRIORITY:
            parts.append(f"Priority token adds a flat {self.token_fee(token_type):.2f}.")
        return " ".join(part for part in parts if part)
