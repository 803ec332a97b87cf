"""Tests for catalog_ingest.core.types module."""

from typing import get_type_hints

import pytest

from catalog_ingest.core import types
from catalog_ingest.core.types import SessionFactory, SpreadsheetRecord


@pytest.mark.unit
def test_exports() -> None:
    assert set(types.__all__) == {"SessionFactory", "SpreadsheetRecord"}


@pytest.mark.unit
def test_type_annotation_usage() -> None:
    """Test the aliases can be used as annotations."""

    def example_function(factory: SessionFactory, record: SpreadsheetRecord) -> None:
        pass

    hints = get_type_hints(example_function)
    assert "factory" in hints
    assert hints["record"] == dict[str, str]
