from typing import Any, Dict, List
from pydantic import ValidationError

# Promotions
from free_gift.promotions.free_gift import run, empty_result

# DTOs
from free_gift.dto.functions import RawRunInput, RunInput, Cart, CartLine, FunctionRunResult

# Sentry
from free_gift.config.sentry import capture_exception, capture_message

# Logging
from free_gift.logging.utils import get_app_logger
logger = get_app_logger("free_gift.core.free_gift_functions")


def validate_lines(raw_lines: List[Any]) -> List[CartLine]:
    """
    Validate cart lines one at a time. A line that does not validate is
    dropped: it is neither a gift nor a purchase, the rest of the cart
    is still evaluated.

    Args:
        raw_lines: Lines as sent by the host

    Returns:
        Valid lines in cart order
    """
    lines = []
    for index, raw_line in enumerate(raw_lines):
        try:
            lines.append(CartLine.model_validate(raw_line))
        except ValidationError as e:
            capture_message(f"free_gift_run_invalid_line | index={index} errors={e.errors(include_url=False)}", level="warning")
    return lines


def run_free_gift_core(payload: Dict[str, Any]) -> FunctionRunResult:
    """
    Core function invoked by the host platform for every checkout evaluation.
    A discount failure must never block checkout: a malformed envelope or an
    unexpected error degrades to the empty instruction, a malformed line only
    drops that line.

    Args:
        payload: Raw run input as sent by the host ({"cart": {"lines": [...]}})

    Returns:
        FunctionRunResult to apply to the order
    """
    try:
        raw_input = RawRunInput.model_validate(payload)
    except ValidationError as e:
        capture_message(f"free_gift_run_invalid_input | errors={e.errors(include_url=False)}", level="warning")
        return empty_result()

    lines = validate_lines(raw_input.cart.lines)
    logger.info(f"free_gift_run | lines_count={len(raw_input.cart.lines)} valid_lines={len(lines)}")
    try:
        result = run(RunInput(cart=Cart(lines=lines)))
    except Exception as e:
        logger.error(f"free_gift_run_error | error={e}", exc_info=True)
        capture_exception(e)
        return empty_result()

    logger.info(f"free_gift_run_response | strategy={result.discount_application_strategy} discounts={len(result.discounts)}")
    return result
