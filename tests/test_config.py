"""Application Configuration: tests for environment overrides and vocabulary mapping."""

import pytest
from pydantic import ValidationError

from refinery.config import Settings
from refinery.core.domain_types import Visibility
from refinery.core.vocabulary import DEFAULT_VOCABULARY


def test_defaults_map_to_default_vocabulary():
    assert Settings().vocabulary() == DEFAULT_VOCABULARY


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REFINERY_REFINE_NAME", "validate")
    monkeypatch.setenv("REFINERY_DEFAULT_VISIBILITY", "export")
    settings = Settings()
    assert settings.refine_name == "validate"
    assert settings.default_visibility is Visibility.EXPORT
    assert settings.vocabulary().refine_name == "validate"


@pytest.mark.parametrize("value", ["", "has space"])
def test_blank_or_spaced_identifiers_are_rejected(value):
    with pytest.raises(ValidationError):
        Settings(decide_function=value)
