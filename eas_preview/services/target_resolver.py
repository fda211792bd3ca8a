"""
QR Target Resolver

Decides which app runtime the preview QR codes should open: a development
build of the project, or the generic Expo Go client.
"""

from typing import Callable, Dict, Optional

from eas_preview.logging_config import get_logger
from eas_preview.models import QrTarget

logger = get_logger(__name__)


# `dev-client` is kept as an alias of `dev-build` for older workflows
QR_TARGET_ALIASES: Dict[str, QrTarget] = {
    "dev-build": QrTarget.DEV_BUILD,
    "dev-client": QrTarget.DEV_BUILD,
    "expo-go": QrTarget.EXPO_GO,
}


class InvalidInputError(ValueError):
    """Raised when a user-provided input has an unexpected value or shape."""
    pass


def resolve_qr_target(
    selection: Optional[str],
    infer: Callable[[], QrTarget]
) -> QrTarget:
    """
    Resolve the QR target from an explicit selection.

    Args:
        selection: User selection, `None` or empty when not provided
        infer: Called only when no selection was made, classifies the project

    Returns:
        The resolved QrTarget

    Raises:
        InvalidInputError: If the selection is not a known alias
    """
    if not selection:
        target = infer()
        logger.debug("Inferred QR target from project", qr_target=target.value)
        return target

    target = QR_TARGET_ALIASES.get(selection)
    if target is None:
        raise InvalidInputError(
            f'Invalid QR code target: "{selection}", '
            f'expected "{QrTarget.EXPO_GO.value}" or "{QrTarget.DEV_BUILD.value}"'
        )

    logger.debug("Using selected QR target", selection=selection, qr_target=target.value)
    return target
