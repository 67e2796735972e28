"""
Serialization Utilities

Converts between grammar descriptors (plain dicts/lists, e.g. from
``json.load``) and Grammar models.

- ``deserialize_grammar``: validate a descriptor, then build a Grammar
- ``serialize_grammar``: Grammar back to a descriptor

Descriptor layout::

    {
        "start_symbol": "S",
        "rules": [
            {"nonterminal_name": "S",
             "alternatives": [[{"literal": "a"}, {"class": "integer"}],
                              [{"nonterminal": "S"}],
                              [{"empty": true}]]}
        ]
    }
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import MalformedGrammar
from ..models.grammar import Grammar, Rule
from ..models.symbols import EMPTY, Class, Literal, NonTerminal, Symbol
from ..schemas.validator import validate_grammar

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Grammar Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_grammar(grammar: Grammar) -> dict[str, Any]:
    """
    Serialize a Grammar to a descriptor.

    The output passes ``validate_grammar`` and deserializes to an equal Grammar.
    """
    return grammar.to_dict()


def deserialize_grammar(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = True,
) -> Grammar:
    """
    Build a Grammar from a descriptor.

    Args:
        data: Descriptor with ``start_symbol`` and ``rules``
        validate: Whether to validate the descriptor first
        strict: Passed to ``validate_grammar`` (full JSON schema check)

    Returns:
        Validated Grammar

    Raises:
        MalformedGrammar: If the descriptor or the grammar it describes is invalid
    """
    if validate:
        validate_grammar(data, strict=strict)

    rules = [
        _deserialize_rule(rule_data, f"rules[{i}]")
        for i, rule_data in enumerate(_field(data, "rules", ""))
    ]
    grammar = Grammar(rules, start=_field(data, "start_symbol", ""))
    logger.debug(
        f"Loaded grammar with {len(grammar)} rules, start symbol {grammar.start!r}"
    )
    return grammar


def _deserialize_rule(data: dict[str, Any], path: str) -> Rule:
    """Deserialize a Rule from a rule record."""
    name = _field(data, "nonterminal_name", path)
    alternatives = tuple(
        tuple(
            _deserialize_symbol(symbol, f"{path}.alternatives[{j}][{k}]", name)
            for k, symbol in enumerate(alternative)
        )
        for j, alternative in enumerate(_field(data, "alternatives", path))
    )
    try:
        return Rule(name, alternatives)
    except MalformedGrammar as e:
        e.path = e.path or path
        raise


def _deserialize_symbol(data: dict[str, Any], path: str, rule_name: str) -> Symbol:
    """Deserialize a single symbol descriptor."""
    if not isinstance(data, dict):
        raise MalformedGrammar(
            f"Rule {rule_name!r}: symbol must be an object, got {type(data).__name__}",
            path=path,
            nonterminal=rule_name,
        )
    try:
        if "literal" in data:
            return Literal(data["literal"])
        if "class" in data:
            return Class(data["class"])
        if "nonterminal" in data:
            return NonTerminal(data["nonterminal"])
        if data.get("empty") is True:
            return EMPTY
    except (TypeError, ValueError) as e:
        raise MalformedGrammar(
            f"Rule {rule_name!r}: {e}",
            path=path,
            nonterminal=rule_name,
        ) from e
    raise MalformedGrammar(
        f"Rule {rule_name!r}: unrecognized symbol descriptor {data!r}",
        path=path,
        nonterminal=rule_name,
    )


def _field(data: Any, key: str, path: str) -> Any:
    """Required descriptor field; reached unchecked when validation is skipped."""
    if not isinstance(data, dict) or key not in data:
        where = f"{path}.{key}" if path else key
        raise MalformedGrammar(
            f"Missing required field: {where}",
            path=where,
            errors=[f"Missing field: {key}"],
        )
    return data[key]
