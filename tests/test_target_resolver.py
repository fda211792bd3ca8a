"""
Tests for the QR Target Resolver
"""

import pytest

from eas_preview.models import QrTarget
from eas_preview.services.target_resolver import InvalidInputError, resolve_qr_target


def fail_inference() -> QrTarget:
    raise AssertionError("inference must not be called for an explicit target")


class TestResolveQrTarget:
    """Test suite for resolve_qr_target."""

    @pytest.mark.parametrize("selection, expected", [
        ("dev-build", QrTarget.DEV_BUILD),
        ("dev-client", QrTarget.DEV_BUILD),
        ("expo-go", QrTarget.EXPO_GO),
    ])
    def test_explicit_alias(self, selection, expected):
        """Test that known aliases resolve without inference."""
        assert resolve_qr_target(selection, fail_inference) == expected

    def test_unknown_target(self):
        """Test that an unknown target names the value and the valid aliases."""
        with pytest.raises(InvalidInputError) as exc_info:
            resolve_qr_target("unknown", fail_inference)

        assert str(exc_info.value) == (
            'Invalid QR code target: "unknown", expected "expo-go" or "dev-build"'
        )

    def test_aliases_are_case_sensitive(self):
        """Test that aliases must match exactly."""
        with pytest.raises(InvalidInputError, match="Expo-Go"):
            resolve_qr_target("Expo-Go", fail_inference)

    @pytest.mark.parametrize("inferred", [QrTarget.DEV_BUILD, QrTarget.EXPO_GO])
    def test_infers_when_omitted(self, inferred):
        """Test that the project is classified when no target is given."""
        assert resolve_qr_target(None, lambda: inferred) == inferred

    def test_empty_selection_is_omitted(self):
        """Test that an empty CI input counts as not provided."""
        assert resolve_qr_target("", lambda: QrTarget.EXPO_GO) == QrTarget.EXPO_GO

    def test_invalid_input_error_is_value_error(self):
        """Test that InvalidInputError can be handled as ValueError."""
        assert issubclass(InvalidInputError, ValueError)
