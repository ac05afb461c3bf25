"""Tests for the model catalog."""

import pytest

from transtudio.core.catalog import (
    MODEL_CATALOG,
    _MODEL_LOOKUP,
    get_model,
    list_models,
    require_model,
)
from transtudio.core.errors import UserInputError
from transtudio.core.types import ProviderType


def test_catalog_ids_are_unique():
    ids = [entry.id for entry in MODEL_CATALOG]
    assert len(ids) == len(set(ids))


def test_catalog_covers_both_providers():
    provider_types = {entry.provider_type for entry in list_models()}
    assert provider_types == {ProviderType.ANTHROPIC, ProviderType.GOOGLE}


@pytest.mark.parametrize(
    "model_id,input_price,output_price",
    [
        ("claude-haiku-4-5", 1.0, 5.0),
        ("claude-sonnet-4-5", 3.0, 15.0),
        ("claude-opus-4-5", 5.0, 25.0),
        ("gemini-2.5-flash", 0.3, 2.5),
        ("gemini-3-flash", 0.5, 3.0),
        ("gemini-3-pro", 2.0, 12.0),
    ],
)
def test_catalog_prices(model_id, input_price, output_price):
    model = get_model(model_id)
    assert model.input_price_per_million == input_price
    assert model.output_price_per_million == output_price


def test_get_model_is_stable():
    """Repeated lookups return the same entry."""
    assert get_model("gemini-3-pro") is get_model("gemini-3-pro")


@pytest.mark.parametrize("model_id", [None, "", "gpt-4o", "CLAUDE-HAIKU-4-5"])
def test_get_model_unknown(model_id):
    assert get_model(model_id) is None


def test_require_model_unknown_raises_user_error():
    with pytest.raises(UserInputError) as excinfo:
        require_model("not-a-model")
    assert excinfo.value.public_message == "Unknown model selected."
    assert excinfo.value.status_code == 400


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        _MODEL_LOOKUP["new-model"] = MODEL_CATALOG[0]

    entry = get_model("claude-haiku-4-5")
    with pytest.raises(Exception):
        entry.input_price_per_million = 0.0
