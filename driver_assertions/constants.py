"""Wire-level names shared by the check surface, the registry and the driver.

Semantic keys are the ``key`` values the driver puts on every answer message.
Report types are the ``type`` values handed to the reporter; negated checks
share the semantic key of their positive form and prefix the type with ``!``.
"""

from typing import Final, FrozenSet


class SemanticKey:
    """Message keys emitted by the driver, one per driver query."""

    EXISTS: Final[str] = "exists"
    VISIBLE: Final[str] = "visible"
    TEXT: Final[str] = "text"
    VAL: Final[str] = "val"
    CSS: Final[str] = "css"
    WIDTH: Final[str] = "width"
    HEIGHT: Final[str] = "height"
    SELECTED: Final[str] = "selected"
    ENABLED: Final[str] = "enabled"
    COOKIE: Final[str] = "cookie"
    HTTP_STATUS: Final[str] = "httpStatus"
    ATTRIBUTE: Final[str] = "attribute"
    NUMBER_OF_ELEMENTS: Final[str] = "numberOfElements"
    NUMBER_OF_VISIBLE_ELEMENTS: Final[str] = "numberOfVisibleElements"
    ALERT_TEXT: Final[str] = "alertText"
    TITLE: Final[str] = "title"
    URL: Final[str] = "url"
    RESOURCE_EXISTS: Final[str] = "resourceExists"


# Kinds whose comparison is skipped when no expected value was given.
# A bare ``number_of_elements("#teaser")`` only fetches the value so that a
# following ``is_``/``gt``/... attachment can judge it.
VALUE_PRESENCE_KEYS: Final[FrozenSet[str]] = frozenset({
    SemanticKey.TITLE,
    SemanticKey.WIDTH,
    SemanticKey.HEIGHT,
    SemanticKey.URL,
    SemanticKey.TEXT,
    SemanticKey.ATTRIBUTE,
    SemanticKey.NUMBER_OF_ELEMENTS,
    SemanticKey.NUMBER_OF_VISIBLE_ELEMENTS,
})

NEGATED_PREFIX: Final[str] = "!"

# Environment variable pointing at a JSON configuration file
CONFIG_ENV_VAR: Final[str] = "DRIVER_ASSERTIONS_CONFIG"

LOGGER_NAME: Final[str] = "driver_assertions"
