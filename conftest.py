"""Shared fixtures for the test suite."""

import pytest

from edi_samples import SAMPLE_835, SAMPLE_837, control_char_document, make_isa
from segment_catalog import default_registry


@pytest.fixture
def sample_835():
    return SAMPLE_835


@pytest.fixture
def sample_837():
    return SAMPLE_837


@pytest.fixture
def control_char_edi():
    return control_char_document()


@pytest.fixture
def isa():
    return make_isa


@pytest.fixture
def registry():
    return default_registry()
