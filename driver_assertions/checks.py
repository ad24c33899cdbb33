"""Catalog of check kinds.

Every public check is one ``CheckKind``: which driver method fetches the
value, which key the answer carries, which comparator judges it, and how the
caller's positional arguments are named. ``Assertions`` methods are thin
wrappers that look their kind up here.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from . import comparators
from .constants import NEGATED_PREFIX, SemanticKey

# Parameter names with a fixed meaning; anything else is an extra driver argument
SELECTOR = "selector"
EXPECTED = "expected"
MESSAGE = "message"

_UNSET = object()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckKind:
    """Static description of one public check."""
    name: str
    semantic_key: str
    comparator: Callable[[Any, Any], bool]
    driver_method: str
    parameters: Tuple[str, ...]
    driver_arguments: Tuple[str, ...]
    negated: bool = False
    fixed_expected: Any = _UNSET
    chain_on_query: bool = False

    @property
    def report_type(self) -> str:
        return f"{NEGATED_PREFIX}{self.semantic_key}" if self.negated else self.semantic_key

    @property
    def selector_based(self) -> bool:
        return bool(self.parameters) and self.parameters[0] == SELECTOR

    def bind(self, values: Tuple[Any, ...], active_selector: Optional[str] = None) -> Dict[str, Any]:
        """Name the caller's positional arguments.

        While a query is open the active selector is prepended and the caller's
        arguments shift right by one, so ``text("Home", "msg")`` under
        ``query("#nav")`` binds like ``text("#nav", "Home", "msg")``.

        Args:
            values: Positional arguments as passed by the caller
            active_selector: Selector of the open query, if any

        Returns:
            Mapping of parameter name to value, including ``expected``.
            Arguments beyond the check's parameters (e.g. an explicit selector
            inside a query) are dropped with a warning.
        """
        if self.selector_based and active_selector is not None:
            values = (active_selector,) + tuple(values)

        if len(values) > len(self.parameters):
            overflow = values[len(self.parameters):]
            if any(value is not None for value in overflow):
                logger.warning(
                    f"{self.name}() takes {len(self.parameters)} arguments, "
                    f"{len(values)} given (active selector {active_selector!r}); "
                    f"ignoring {overflow!r}"
                )
            values = values[:len(self.parameters)]

        bound = dict(zip(self.parameters, values))
        for name in self.parameters[len(values):]:
            bound[name] = None
        if self.fixed_expected is not _UNSET:
            bound[EXPECTED] = self.fixed_expected
        bound.setdefault(EXPECTED, None)
        return bound

    def driver_args(self, bound: Dict[str, Any]) -> Tuple[Any, ...]:
        """Arguments for the driver call, identifier not included."""
        return tuple(bound[name] for name in self.driver_arguments)

    @staticmethod
    def extra_arguments(bound: Dict[str, Any]) -> Dict[str, Any]:
        return {
            name: value for name, value in bound.items()
            if name not in (SELECTOR, EXPECTED, MESSAGE)
        }


def _kind(name, key, comparator, driver_method, parameters, driver_arguments, **options) -> CheckKind:
    return CheckKind(
        name=name,
        semantic_key=key,
        comparator=comparator,
        driver_method=driver_method,
        parameters=parameters,
        driver_arguments=driver_arguments,
        **options,
    )


_SELECTOR_ONLY = (SELECTOR, MESSAGE)
_SELECTOR_EXPECTED = (SELECTOR, EXPECTED, MESSAGE)
_EXPECTED_ONLY = (EXPECTED, MESSAGE)

CHECK_KINDS: Dict[str, CheckKind] = {kind.name: kind for kind in (
    # Presence and visibility
    _kind("exists", SemanticKey.EXISTS, comparators.truthy,
          "exists", _SELECTOR_ONLY, (SELECTOR,)),
    _kind("doesnt_exist", SemanticKey.EXISTS, comparators.falsy,
          "exists", _SELECTOR_ONLY, (SELECTOR,), negated=True),
    _kind("visible", SemanticKey.VISIBLE, comparators.truthy,
          "visible", _SELECTOR_ONLY, (SELECTOR,)),
    _kind("not_visible", SemanticKey.VISIBLE, comparators.falsy,
          "visible", _SELECTOR_ONLY, (SELECTOR,), negated=True),

    # Element values
    _kind("text", SemanticKey.TEXT, comparators.shallow_equals,
          "text", _SELECTOR_EXPECTED, (SELECTOR,), chain_on_query=True),
    _kind("doesnt_have_text", SemanticKey.TEXT, comparators.shallow_unequals,
          "text", _SELECTOR_EXPECTED, (SELECTOR,), negated=True),
    _kind("val", SemanticKey.VAL, comparators.shallow_equals,
          "val", _SELECTOR_EXPECTED, (SELECTOR,)),
    _kind("css", SemanticKey.CSS, comparators.shallow_equals,
          "css", (SELECTOR, "property", EXPECTED, MESSAGE), (SELECTOR, "property")),
    _kind("width", SemanticKey.WIDTH, comparators.shallow_equals,
          "width", _SELECTOR_EXPECTED, (SELECTOR,)),
    _kind("height", SemanticKey.HEIGHT, comparators.shallow_equals,
          "height", _SELECTOR_EXPECTED, (SELECTOR,)),
    _kind("attr", SemanticKey.ATTRIBUTE, comparators.shallow_equals,
          "attribute", (SELECTOR, "attribute", EXPECTED, MESSAGE), (SELECTOR, "attribute")),

    # Form state; the boolean flag is part of the driver command
    _kind("selected", SemanticKey.SELECTED, comparators.shallow_equals,
          "selected", _SELECTOR_ONLY, (SELECTOR, EXPECTED), fixed_expected=True),
    _kind("not_selected", SemanticKey.SELECTED, comparators.shallow_equals,
          "selected", _SELECTOR_ONLY, (SELECTOR, EXPECTED), fixed_expected=False),
    _kind("enabled", SemanticKey.ENABLED, comparators.shallow_equals,
          "enabled", _SELECTOR_ONLY, (SELECTOR, EXPECTED), fixed_expected=True),
    _kind("disabled", SemanticKey.ENABLED, comparators.shallow_equals,
          "enabled", _SELECTOR_ONLY, (SELECTOR, EXPECTED), fixed_expected=False),

    # Element counts
    _kind("number_of_elements", SemanticKey.NUMBER_OF_ELEMENTS, comparators.shallow_equals,
          "number_of_elements", _SELECTOR_EXPECTED, (SELECTOR,)),
    _kind("number_of_visible_elements", SemanticKey.NUMBER_OF_VISIBLE_ELEMENTS,
          comparators.shallow_equals,
          "number_of_visible_elements", _SELECTOR_EXPECTED, (SELECTOR,)),

    # Page level
    _kind("cookie", SemanticKey.COOKIE, comparators.shallow_equals,
          "cookie", ("name", EXPECTED, MESSAGE), ("name",)),
    _kind("http_status", SemanticKey.HTTP_STATUS, comparators.shallow_equals,
          "http_status", _EXPECTED_ONLY, ()),
    _kind("title", SemanticKey.TITLE, comparators.shallow_equals,
          "title", _EXPECTED_ONLY, ()),
    _kind("doesnt_have_title", SemanticKey.TITLE, comparators.shallow_unequals,
          "title", _EXPECTED_ONLY, (), negated=True),
    _kind("url", SemanticKey.URL, comparators.shallow_equals,
          "url", _EXPECTED_ONLY, ()),
    _kind("doesnt_have_url", SemanticKey.URL, comparators.shallow_unequals,
          "url", _EXPECTED_ONLY, (), negated=True),
    _kind("dialog_text", SemanticKey.ALERT_TEXT, comparators.shallow_equals,
          "alert_text", _EXPECTED_ONLY, (), chain_on_query=True),
    _kind("dialog_doesnt_have_text", SemanticKey.ALERT_TEXT, comparators.shallow_unequals,
          "alert_text", _EXPECTED_ONLY, (), negated=True),
    _kind("resource_exists", SemanticKey.RESOURCE_EXISTS, comparators.truthy,
          "resource_exists", ("url", MESSAGE), ("url",)),
)}
