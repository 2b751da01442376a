from __future__ import annotations

import pytest

from artifacts.models import SymbolHint, title_for_hint


@pytest.mark.parametrize(
    ("hint", "title"),
    [
        (SymbolHint.FUNCTION, "Function"),
        (SymbolHint.CLASS, "Class"),
        (SymbolHint.INTERFACE, "Interface"),
        (SymbolHint.CLASS_METHOD, "Class Method"),
        (SymbolHint.CLASS_ARROW_FUNCTION, "Class Arrow Function"),
        (SymbolHint.ARROW_FUNCTION, "Arrow Function"),
        (SymbolHint.TYPE_ALIAS, "Type Alias"),
        ("typescript.classMethod", "Class Method"),
        ("typescript.enum", "Unknown"),
        (None, "Unknown"),
    ],
)
def test_title_for_hint(hint: SymbolHint | str | None, title: str) -> None:
    assert title_for_hint(hint) == title


def test_every_hint_has_a_title() -> None:
    assert all(title_for_hint(hint) != "Unknown" for hint in SymbolHint)
