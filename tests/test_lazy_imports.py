"""Tests for funnel.__init__: lazy imports cover all public names."""

import pytest

import funnel


@pytest.mark.parametrize("name", funnel.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(funnel, name)
    assert obj is not None, f"funnel.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        funnel.__getattr__("ThisDoesNotExist")


def test_public_names_are_the_real_classes() -> None:
    from funnel.http.response import Response

    assert funnel.Response is Response
