"""
Core constants for the free gift function service

Merchandise kinds, discount application strategies and the fixed values
of the gift-with-purchase discount.
"""

class MerchandiseKind:
    """Values of the `__typename` discriminator on cart line merchandise"""

    PRODUCT_VARIANT = "ProductVariant"
    CUSTOM_PRODUCT = "CustomProduct"


class DiscountApplicationStrategy:
    """How the host combines this function's discounts with other sources"""

    FIRST = "FIRST"
    MAXIMUM = "MAXIMUM"
    ALL = "ALL"


class FreeGiftDiscount:
    """Fixed values of the emitted gift discount"""

    MESSAGE = "Free gift with purchase"
    PERCENTAGE = "100.0"
    TARGET_QUANTITY = 1
    NO_QUALIFYING_LINES = "No cart lines qualify for gift with purchase discount."


class OptionGroupName:
    """Option group names with dedicated storefront rendering"""

    COLOR = "Color"


class OptionAvailability:
    """CSS classes applied to option values"""

    OUT_OF_STOCK = "option--oos"
    AVAILABLE = "available"


SWATCH_IMAGE_SIZE = "x100"
