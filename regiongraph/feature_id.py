"""
Region identifier resolution from feature properties.

Census exports name the identifier column differently per vintage. Known
keys are tried first in priority order; failing that, properties are
scanned for any key with the identifier prefix. The scan logs a warning
because it usually means a new export schema should be added to the known
keys.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .constants import ID_KEY_PREFIX, KNOWN_ID_KEYS
from .errors import MissingIdentifierError

logger = logging.getLogger(__name__)

Properties = Optional[Mapping[str, Any]]


def is_id_like(key: str, prefix: str = ID_KEY_PREFIX) -> bool:
    return key.startswith(prefix)


def known_feature_id(
    properties: Properties,
    known_keys: Sequence[str] = KNOWN_ID_KEYS,
) -> Optional[str]:
    """Return the value of the first known key holding a string."""
    if not properties:
        return None

    for key in known_keys:
        value = properties.get(key)
        if isinstance(value, str):
            return value

    return None


def prefixed_feature_id(
    properties: Properties,
    prefix: str = ID_KEY_PREFIX,
) -> Optional[str]:
    """
    Scan properties for an identifier-like key.

    Keys are visited in sorted order so the choice does not depend on how
    the mapping happened to be built. The first prefixed key holding a
    string wins.
    """
    if not properties:
        return None

    for key in sorted(properties):
        if not is_id_like(key, prefix):
            continue
        value = properties[key]
        if isinstance(value, str):
            logger.warning(
                f"Found identifier-like property '{key}' by manual search; "
                f"consider adding it to the known identifier keys"
            )
            return value

    return None


def feature_id(
    properties: Properties,
    known_keys: Sequence[str] = KNOWN_ID_KEYS,
    prefix: str = ID_KEY_PREFIX,
) -> str:
    """
    Resolve the identifier string of one feature.

    Args:
        properties: The feature's property mapping (may be None).
        known_keys: Well-known identifier keys in priority order.
        prefix: Case-sensitive prefix for the fallback scan.

    Returns:
        The identifier string.

    Raises:
        MissingIdentifierError: If no strategy yields an identifier.
    """
    strategies: List[Callable[[Properties], Optional[str]]] = [
        lambda props: known_feature_id(props, known_keys),
        lambda props: prefixed_feature_id(props, prefix),
    ]

    for strategy in strategies:
        resolved = strategy(properties)
        if resolved is not None:
            return resolved

    available = sorted(properties) if properties else []
    logger.warning(f"No identifier-like property found; available properties: {available}")
    raise MissingIdentifierError(
        f"No identifier property found (known keys: {list(known_keys)}, "
        f"prefix: '{prefix}'); available properties: {available}"
    )
