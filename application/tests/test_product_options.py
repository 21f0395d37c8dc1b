"""Test the product options presenter."""
import pytest
from free_gift.dto.storefront import Product
from free_gift.storefront.selection_state import SelectionStore
from free_gift.storefront.product_options import ProductOptionsPresenter, resize_image


@pytest.fixture
def product():
    return Product.model_validate({
        "options": [
            {"name": "Color", "position": 1, "values": ["Black", "Sand", "Olive"]},
            {"name": "Size", "position": 2, "values": ["S", "M", "L"]},
        ],
        "variants": [
            {"id": "v-black-s", "options": ["Black", "S"], "available": True},
            {"id": "v-black-m", "options": ["Black", "M"], "available": False},
            {"id": "v-sand-m", "options": ["Sand", "M"], "available": True},
            {"id": "v-sand-l", "options": ["Sand", "L"], "available": False},
        ],
        "media": [
            {"associated_color": "black", "variant_image": "https://cdn.example.com/files/black.jpg?v=3"},
            {"associated_color": "sand", "variant_image": "https://cdn.example.com/files/sand.png"},
        ],
        "size_chart_image": "https://cdn.example.com/files/chart.png",
    })


def test_resize_image():
    assert resize_image("https://cdn.example.com/files/black.jpg?v=3", "x100") == "https://cdn.example.com/files/black_x100.jpg?v=3"
    assert resize_image("https://cdn.example.com/files/black", "x100") == "https://cdn.example.com/files/black_x100"
    assert resize_image(None, "x100") is None


def test_select_size_updates_store_and_variant(product):
    store = SelectionStore(["Black", "S"])
    presenter = ProductOptionsPresenter(product, store)

    scroll = presenter.select_option(presenter.get_group("Size"), "M")

    assert scroll is False
    assert store.get_selected_options() == ["Black", "M"]
    assert store.get_selected_variant() == "v-black-m"


def test_select_color_requests_scroll(product):
    store = SelectionStore(["Black", "M"])
    presenter = ProductOptionsPresenter(product, store)

    assert presenter.select_option(presenter.get_group("Color"), "Sand") is True
    assert store.get_selected_options() == ["Sand", "M"]
    assert store.get_selected_variant() == "v-sand-m"


def test_select_pads_missing_positions(product):
    store = SelectionStore()
    presenter = ProductOptionsPresenter(product, store)

    presenter.select_option(presenter.get_group("Size"), "L")
    assert store.get_selected_options() == ["", "L"]
    assert store.get_selected_variant() is None


def test_select_notifies_subscribers(product):
    store = SelectionStore(["Black", "S"])
    presenter = ProductOptionsPresenter(product, store)
    seen = []
    store.subscribe(SelectionStore.SELECTED_VARIANT, seen.append)

    presenter.select_option(presenter.get_group("Size"), "M")
    assert seen == ["v-black-m"]


def test_select_rejects_unknown_value(product):
    presenter = ProductOptionsPresenter(product, SelectionStore())
    with pytest.raises(ValueError):
        presenter.select_option(presenter.get_group("Size"), "XL")
    with pytest.raises(ValueError):
        presenter.get_group("Material")


def test_availability_uses_first_selected_option(product):
    store = SelectionStore(["Black", "S"])
    presenter = ProductOptionsPresenter(product, store)
    assert presenter.availability_class("M") == "option--oos"
    assert presenter.availability_class("L") == "available"

    store.set_selected_options(["Sand", "M"])
    assert presenter.availability_class("M") == "available"
    assert presenter.availability_class("L") == "option--oos"


def test_availability_without_selection(product):
    presenter = ProductOptionsPresenter(product, SelectionStore())
    assert presenter.availability_class("M") == "available"


def test_swatch_image(product):
    presenter = ProductOptionsPresenter(product, SelectionStore())
    assert presenter.swatch_image("Black") == "https://cdn.example.com/files/black_x100.jpg?v=3"
    assert presenter.swatch_image("Olive") is None


def test_build_view(product):
    presenter = ProductOptionsPresenter(product, SelectionStore(["Black", "S"], "v-black-s"))
    view = presenter.build_view()

    color, size = view.groups
    assert color.is_color and not color.show_size_chart
    assert color.label == "Color: Black"
    assert [v.value for v in color.values] == ["Black", "Sand"]
    assert color.values[0].selected and not color.values[1].selected

    assert size.show_size_chart
    assert size.label == "Size: S"
    assert [v.image for v in size.values] == [None, None, None]
    assert not view.show_standalone_size_chart
    assert view.selected_variant == "v-black-s"


def test_color_only_product_shows_standalone_size_chart():
    product = Product.model_validate({
        "options": [{"name": "Color", "position": 1, "values": ["Black"]}],
        "variants": [{"id": "v-1", "options": ["Black"]}],
        "size_chart_image": "https://cdn.example.com/files/chart.png",
    })
    view = ProductOptionsPresenter(product, SelectionStore()).build_view()
    assert view.show_standalone_size_chart
    assert view.groups[0].values == []
    assert view.groups[0].label == "Color: "
