from typing import List

from free_gift.core.constants import DiscountApplicationStrategy, FreeGiftDiscount
from free_gift.dto.functions import (
    Cart, CartLine, RunInput, ProductVariant, ProductVariantTarget, Target,
    Discount, Value, Percentage, FunctionRunResult,
)
from free_gift.promotions.identifiers import ids_match

from free_gift.logging.utils import get_app_logger
logger = get_app_logger("free_gift.promotions.free_gift")


def empty_result() -> FunctionRunResult:
    """No-op instruction: no discounts, combined with everything else."""
    return FunctionRunResult(discounts=[], discount_application_strategy=DiscountApplicationStrategy.ALL)


def is_gift_line(line: CartLine) -> bool:
    return isinstance(line.merchandise, ProductVariant) and line.is_free_gift


def is_purchase_line(line: CartLine) -> bool:
    return not line.is_free_gift


def create_target(line: CartLine) -> Target:
    """Discount target for a gift line; always one unit regardless of line quantity."""
    return Target(product_variant=ProductVariantTarget(id=line.merchandise.id, quantity=FreeGiftDiscount.TARGET_QUANTITY))


def unlocks(purchase_line: CartLine, target: Target) -> bool:
    free_gift_id = purchase_line.free_gift_id.value if purchase_line.free_gift_id else None
    return ids_match(free_gift_id, target.product_variant.id)


def filter_eligible_targets(cart: Cart, targets: List[Target]) -> List[Target]:
    """
    Keep the gift targets unlocked by at least one purchase line.

    Args:
        cart: Cart snapshot
        targets: Gift targets in cart line order

    Returns:
        Eligible targets, order preserved
    """
    purchased_lines = [line for line in cart.lines if is_purchase_line(line)]
    return [
        target for target in targets
        if any(unlocks(line, target) for line in purchased_lines)
    ]


def evaluate(cart: Cart) -> FunctionRunResult:
    """
    Decide which gift lines are free and build the discount instruction.

    A gift line is free when some purchase line's free_gift_id resolves to the
    same numeric id as the gift's variant id.

    Args:
        cart: Cart snapshot, not modified

    Returns:
        One 100% discount over all eligible gift targets with the MAXIMUM
        strategy, or the empty instruction when nothing qualifies
    """
    gift_targets = [create_target(line) for line in cart.lines if is_gift_line(line)]
    valid_targets = filter_eligible_targets(cart, gift_targets)

    if not valid_targets:
        logger.warning(FreeGiftDiscount.NO_QUALIFYING_LINES)
        return empty_result()

    logger.info(f"free_gift_evaluated | gift_lines={len(gift_targets)} eligible={len(valid_targets)}")
    return FunctionRunResult(
        discounts=[
            Discount(
                targets=valid_targets,
                value=Value(percentage=Percentage(value=FreeGiftDiscount.PERCENTAGE)),
                message=FreeGiftDiscount.MESSAGE,
            )
        ],
        discount_application_strategy=DiscountApplicationStrategy.MAXIMUM,
    )


def run(run_input: RunInput) -> FunctionRunResult:
    return evaluate(run_input.cart)
