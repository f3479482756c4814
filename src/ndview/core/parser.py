from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, List

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from .exceptions import ParseError
from .spec import Range

GRAMMAR_PATH = Path(__file__).with_name("index_grammar.lark")


@lru_cache(maxsize=1)
def _build_lark() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="earley",
        start="start",
        ambiguity="resolve",
        propagate_positions=True,
        maybe_placeholders=False,
    )


class _IndexXform(Transformer):
    def integer(self, items: List[Token]) -> int:
        return int(items[0])

    def range(self, items: List[Any]) -> Range:
        first, last = items[0], items[1]
        step = items[2] if len(items) > 2 else 1
        return Range(first, last, step)

    def name_key(self, items: List[Token]) -> str:
        return str(items[0])

    def position_key(self, items: List[Token]) -> int:
        return int(items[0])

    def keyed(self, items: List[Any]):
        return (items[0], items[1])

    def list(self, items: List[Any]) -> List[Any]:
        return [item for item in items if item is not None]


def parse_index(text: str) -> Any:
    """Parse a textual index expression into the form ``ndview.get`` accepts.

    ``"[b: 1..2, 0: 0]"`` becomes ``[("b", Range(1, 2)), (0, 0)]`` and
    ``"[0, -1]"`` becomes ``[0, -1]``. Bare entries may sit next to keyed
    ones; ``"[0, c: 1]"`` becomes ``[0, ("c", 1)]``.
    """
    parser = _build_lark()
    source = text.strip()
    try:
        tree = parser.parse(source)
    except UnexpectedInput as exc:
        column = getattr(exc, "column", None) or -1
        if column < 1:
            column = len(source) + 1
        raise ParseError(
            "Syntax error while parsing index expression",
            column=column,
            line_text=source,
        ) from exc
    except LarkError as exc:  # pragma: no cover - defensive
        raise ParseError(str(exc)) from exc
    return _IndexXform().transform(tree)
