from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from free_gift.logging.utils import get_app_logger
logger = get_app_logger("free_gift.storefront.selection_state")

Listener = Callable[[Any], None]


class SelectionStore:
    """
    Selection state shared by the storefront pickers of one product page.

    Holds the selected option values and the selected variant id. Consumers
    get the store passed in, read and write it through the typed accessors
    and subscribe to a key to be called with the new value whenever it changes.
    """

    SELECTED_PRODUCT_OPTIONS = "selectedProductOptions"
    SELECTED_VARIANT = "selectedVariant"
    KEYS = (SELECTED_PRODUCT_OPTIONS, SELECTED_VARIANT)

    def __init__(self, selected_options: Optional[List[str]] = None, selected_variant: Optional[str] = None):
        self._state: Dict[str, Any] = {
            self.SELECTED_PRODUCT_OPTIONS: list(selected_options or []),
            self.SELECTED_VARIANT: selected_variant,
        }
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def get_selected_options(self) -> List[str]:
        return list(self._state[self.SELECTED_PRODUCT_OPTIONS])

    def set_selected_options(self, options: List[str]) -> None:
        self._set(self.SELECTED_PRODUCT_OPTIONS, list(options))

    def get_selected_variant(self) -> Optional[str]:
        return self._state[self.SELECTED_VARIANT]

    def set_selected_variant(self, variant_id: Optional[str]) -> None:
        self._set(self.SELECTED_VARIANT, variant_id)

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """Register a listener for one key; returns a callable that removes it."""
        self._check_key(key)
        self._listeners[key].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[key]:
                self._listeners[key].remove(listener)

        return unsubscribe

    def _set(self, key: str, value: Any) -> None:
        if self._state[key] == value:
            return
        self._state[key] = value
        logger.info(f"selection_state_changed | key={key} value={value}")
        for listener in list(self._listeners[key]):
            listener(list(value) if isinstance(value, list) else value)

    def _check_key(self, key: str) -> None:
        if key not in self.KEYS:
            raise KeyError(f"Unknown selection state key: {key}")
