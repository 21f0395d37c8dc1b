from typing import List, Optional
from pydantic import BaseModel, Field


class OptionGroup(BaseModel):
    """Product option group, e.g. Color or Size"""
    name: str
    position: int = Field(..., ge=1, description="1-based position of the option on variants")
    values: List[str] = Field(default_factory=list)


class Variant(BaseModel):
    id: str
    options: List[str] = Field(default_factory=list, description="Option values in position order")
    available: bool = True


class Media(BaseModel):
    associated_color: Optional[str] = Field(None, description="Lower-cased color value this image shows")
    variant_image: str


class Product(BaseModel):
    options: List[OptionGroup] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)
    media: List[Media] = Field(default_factory=list)
    size_chart_image: Optional[str] = None


class OptionSelection(BaseModel):
    group_name: str
    value: str


class ProductOptionsViewRequest(BaseModel):
    """Request model for rendering the option pickers of a product"""
    product: Product
    selected_options: List[str] = Field(default_factory=list)
    selected_variant: Optional[str] = None
    select: Optional[OptionSelection] = Field(None, description="Optional selection to apply before rendering")


class OptionValueView(BaseModel):
    value: str
    selected: bool
    availability: str
    image: Optional[str] = None


class OptionGroupView(BaseModel):
    name: str
    label: str
    is_color: bool
    show_size_chart: bool
    values: List[OptionValueView]


class ProductOptionsView(BaseModel):
    """Response model for the option pickers"""
    groups: List[OptionGroupView]
    show_standalone_size_chart: bool
    selected_options: List[str]
    selected_variant: Optional[str] = None
    scroll_to_top: bool = False
