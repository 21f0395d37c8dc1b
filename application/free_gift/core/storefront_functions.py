from fastapi import HTTPException

# Storefront
from free_gift.storefront.selection_state import SelectionStore
from free_gift.storefront.product_options import ProductOptionsPresenter

# DTOs
from free_gift.dto.storefront import ProductOptionsViewRequest, ProductOptionsView

# Logging
from free_gift.logging.utils import get_app_logger
logger = get_app_logger("free_gift.core.storefront_functions")


def render_product_options_core(request: ProductOptionsViewRequest) -> ProductOptionsView:
    """
    Core function to render the option pickers of a product page

    Args:
        request: Product data, current selection state and an optional new selection
    Returns:
        ProductOptionsView reflecting the selection state after the optional selection
    """
    store = SelectionStore(request.selected_options, request.selected_variant)
    presenter = ProductOptionsPresenter(request.product, store)

    scroll_to_top = False
    if request.select:
        try:
            group = presenter.get_group(request.select.group_name)
            scroll_to_top = presenter.select_option(group, request.select.value)
        except ValueError as e:
            logger.warning(f"render_product_options_invalid_selection | selection={request.select} error={e}")
            raise HTTPException(
                status_code=400,
                detail={"error_code": "INVALID_OPTION", "message": str(e)}
            )

    view = presenter.build_view(scroll_to_top=scroll_to_top)
    logger.info(f"render_product_options_core_response | groups={len(view.groups)} selected_variant={view.selected_variant}")
    return view
