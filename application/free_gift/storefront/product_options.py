import posixpath
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

# Constants
from free_gift.core.constants import OptionGroupName, OptionAvailability, SWATCH_IMAGE_SIZE

# DTOs
from free_gift.dto.storefront import (
    Product, OptionGroup, Variant, OptionValueView, OptionGroupView, ProductOptionsView,
)

# State
from free_gift.storefront.selection_state import SelectionStore

# Logging
from free_gift.logging.utils import get_app_logger
logger = get_app_logger("free_gift.storefront.product_options")


def resize_image(url: Optional[str], size: str) -> Optional[str]:
    """
    Point a CDN image url at a resized rendition by suffixing the file name,
    e.g. /products/shirt.jpg?v=1 -> /products/shirt_x100.jpg?v=1
    """
    if not url:
        return url
    parts = urlsplit(url)
    root, ext = posixpath.splitext(parts.path)
    return urlunsplit(parts._replace(path=f"{root}_{size}{ext}"))


class ProductOptionsPresenter:
    """Option pickers for one product, reading and writing a SelectionStore"""

    def __init__(self, product: Product, store: SelectionStore):
        self.product = product
        self.store = store

    @property
    def has_size_option(self) -> bool:
        return any(group.name != OptionGroupName.COLOR for group in self.product.options)

    def get_group(self, name: str) -> OptionGroup:
        for group in self.product.options:
            if group.name == name:
                return group
        raise ValueError(f"Unknown option group: {name}")

    def select_option(self, group: OptionGroup, option: str) -> bool:
        """
        Store `option` as the selection for `group` and resolve the matching variant.

        Returns:
            True when the view should scroll to top (color changed)
        """
        if option not in group.values:
            raise ValueError(f"'{option}' is not a value of option group '{group.name}'")

        updated_options = self.store.get_selected_options()
        index = group.position - 1
        if len(updated_options) <= index:
            updated_options.extend([""] * (index + 1 - len(updated_options)))
        updated_options[index] = option
        self.store.set_selected_options(updated_options)

        variant = self.resolve_variant(updated_options)
        if variant:
            self.store.set_selected_variant(variant.id)

        logger.info(f"option_selected | group={group.name} option={option} variant={variant.id if variant else None}")
        return group.name == OptionGroupName.COLOR

    def resolve_variant(self, selected_options: List[str]) -> Optional[Variant]:
        for variant in self.product.variants:
            if variant.options == selected_options:
                return variant
        return None

    def availability_class(self, option: str) -> str:
        """Out of stock when an unavailable variant pairs `option` with the first selected option."""
        selected_options = self.store.get_selected_options()
        first_selected = selected_options[0] if selected_options else None
        sold_out = any(
            option in variant.options and first_selected in variant.options and not variant.available
            for variant in self.product.variants
        )
        return OptionAvailability.OUT_OF_STOCK if sold_out else OptionAvailability.AVAILABLE

    def swatch_image(self, option: str) -> Optional[str]:
        for media in self.product.media:
            if media.associated_color == option.lower():
                return resize_image(media.variant_image, SWATCH_IMAGE_SIZE)
        return None

    def build_group(self, group: OptionGroup) -> OptionGroupView:
        selected_options = self.store.get_selected_options()
        index = group.position - 1
        current = selected_options[index] if index < len(selected_options) else ""
        is_color = group.name == OptionGroupName.COLOR

        values = []
        for option in group.values:
            image = self.swatch_image(option) if is_color else None
            # Color values without a swatch image are not rendered
            if is_color and image is None:
                continue
            values.append(OptionValueView(
                value=option,
                selected=option in selected_options,
                availability=self.availability_class(option),
                image=image,
            ))

        return OptionGroupView(
            name=group.name,
            label=f"{group.name}: {current}",
            is_color=is_color,
            show_size_chart=bool(self.product.size_chart_image) and self.has_size_option and not is_color,
            values=values,
        )

    def build_view(self, scroll_to_top: bool = False) -> ProductOptionsView:
        return ProductOptionsView(
            groups=[self.build_group(group) for group in self.product.options],
            show_standalone_size_chart=not self.has_size_option,
            selected_options=self.store.get_selected_options(),
            selected_variant=self.store.get_selected_variant(),
            scroll_to_top=scroll_to_top,
        )
