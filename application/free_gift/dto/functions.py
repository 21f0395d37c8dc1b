from typing import Annotated, Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from free_gift.core.constants import MerchandiseKind, DiscountApplicationStrategy, FreeGiftDiscount


class HostModel(BaseModel):
    """Base for host payload models: accepts aliases or field names, ignores unknown keys"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Run input
# ---------------------------------------------------------------------------

class ProductVariant(HostModel):
    """Merchandise of kind ProductVariant, the only kind eligible as a gift"""
    typename: Literal["ProductVariant"] = Field(MerchandiseKind.PRODUCT_VARIANT, alias="__typename")
    id: str = Field(..., description="Platform-global variant id, e.g. gid://shopify/ProductVariant/42")


class OtherMerchandise(HostModel):
    """Any merchandise kind other than ProductVariant"""
    typename: Optional[str] = Field(None, alias="__typename")


def merchandise_kind(value) -> str:
    if isinstance(value, dict):
        typename = value.get("__typename", value.get("typename"))
    else:
        typename = getattr(value, "typename", None)
    return "variant" if typename == MerchandiseKind.PRODUCT_VARIANT else "other"


Merchandise = Annotated[
    Union[
        Annotated[ProductVariant, Tag("variant")],
        Annotated[OtherMerchandise, Tag("other")],
    ],
    Discriminator(merchandise_kind),
]


class Attribute(HostModel):
    """Cart line attribute; value is absent when the attribute is not set"""
    value: Optional[str] = None


class CartLine(HostModel):
    id: Optional[str] = Field(None, description="Cart line id")
    quantity: int = Field(default=1, description="Units on the line; not used for gift targets")
    merchandise: Merchandise
    is_free_gift: Optional[bool] = Field(default=False, description="Line is a gift candidate rather than a purchase")
    free_gift_id: Optional[Attribute] = Field(None, description="Gid of the gift variant this purchase unlocks")

    @field_validator("is_free_gift", mode="before")
    @classmethod
    def unset_flag_is_purchase(cls, value):
        # hosts send null for unset attributes
        return False if value is None else value


class Cart(HostModel):
    lines: List[CartLine] = Field(default_factory=list)


class RunInput(HostModel):
    cart: Cart


class RawCart(HostModel):
    """Cart envelope whose lines are validated one at a time"""
    lines: List[Any] = Field(default_factory=list)

    @field_validator("lines", mode="before")
    @classmethod
    def null_lines_are_empty(cls, value):
        return [] if value is None else value


class RawRunInput(HostModel):
    cart: RawCart


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------

class ProductVariantTarget(HostModel):
    id: str
    quantity: int = FreeGiftDiscount.TARGET_QUANTITY


class Target(HostModel):
    product_variant: ProductVariantTarget = Field(..., alias="productVariant")


class Percentage(HostModel):
    value: str


class Value(HostModel):
    percentage: Percentage


class Discount(HostModel):
    targets: List[Target]
    value: Value
    message: Optional[str] = None


class FunctionRunResult(HostModel):
    discounts: List[Discount] = Field(default_factory=list)
    discount_application_strategy: Literal["FIRST", "MAXIMUM", "ALL"] = Field(
        DiscountApplicationStrategy.ALL, alias="discountApplicationStrategy"
    )

    def is_empty(self) -> bool:
        return not self.discounts
