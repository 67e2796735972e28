"""
Grammar Descriptor Validation

Validates already-parsed grammar descriptors (the ``dict`` a driver gets
from ``json.load`` or similar) before they are turned into a Grammar.

Two layers:
- Basic checks on the fields the recognizer relies on, with messages
  that name the offending rule
- Full JSON Schema validation (``grammar.schema.json``) via jsonschema

Referential integrity (dangling nonterminals, missing start rule) is
checked by ``Grammar`` itself, so it also holds for grammars built in code.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import MalformedGrammar
from ..models.symbols import LexicalClass


SYMBOL_KEYS = ("literal", "class", "nonterminal", "empty")

# Loaded lazily, once per process
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def validate_grammar(data: Any, *, strict: bool = True) -> None:
    """
    Validate a grammar descriptor.

    Args:
        data: Descriptor with ``start_symbol`` and ``rules``
        strict: If True, also validate against the full JSON schema

    Raises:
        MalformedGrammar: If the descriptor is invalid
    """
    if not isinstance(data, dict):
        raise MalformedGrammar(
            f"Grammar descriptor must be an object, got {type(data).__name__}"
        )

    missing = [f for f in ("start_symbol", "rules") if f not in data]
    if missing:
        raise MalformedGrammar(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    start = data["start_symbol"]
    if not isinstance(start, str) or not start:
        raise MalformedGrammar(
            f"Invalid start_symbol: {start!r} (must be a non-empty string)",
            path="start_symbol",
        )

    rules = data["rules"]
    if not isinstance(rules, list) or not rules:
        raise MalformedGrammar("rules must be a non-empty list", path="rules")

    for i, rule in enumerate(rules):
        _validate_rule(rule, f"rules[{i}]")

    if strict:
        _validate_schema(data, "grammar")


def _validate_rule(data: Any, path: str) -> None:
    """Validate one rule record."""
    if not isinstance(data, dict):
        raise MalformedGrammar("Rule must be an object", path=path)

    name = data.get("nonterminal_name")
    if not isinstance(name, str) or not name:
        raise MalformedGrammar(
            f"Invalid nonterminal_name: {name!r}",
            path=f"{path}.nonterminal_name",
        )

    alternatives = data.get("alternatives")
    if not isinstance(alternatives, list):
        raise MalformedGrammar(
            f"Rule {name!r}: alternatives must be a list",
            path=f"{path}.alternatives",
            nonterminal=name,
        )
    if not alternatives:
        raise MalformedGrammar(
            f"Rule {name!r} has no alternatives",
            path=f"{path}.alternatives",
            nonterminal=name,
        )

    for j, alternative in enumerate(alternatives):
        alt_path = f"{path}.alternatives[{j}]"
        if not isinstance(alternative, list):
            raise MalformedGrammar(
                f"Rule {name!r}: alternative must be a list of symbols",
                path=alt_path,
                nonterminal=name,
            )
        for k, symbol in enumerate(alternative):
            _validate_symbol(symbol, f"{alt_path}[{k}]", name)


def _validate_symbol(data: Any, path: str, rule_name: str) -> None:
    """Validate a symbol descriptor."""
    if not isinstance(data, dict):
        raise MalformedGrammar(
            f"Rule {rule_name!r}: symbol must be an object, got {data!r}",
            path=path,
            nonterminal=rule_name,
        )

    keys = [k for k in SYMBOL_KEYS if k in data]
    if len(keys) != 1 or len(data) != 1:
        raise MalformedGrammar(
            f"Rule {rule_name!r}: symbol must have exactly one of {list(SYMBOL_KEYS)}, got {sorted(data)}",
            path=path,
            nonterminal=rule_name,
        )

    kind = keys[0]
    value = data[kind]
    if kind == "class":
        if value not in LexicalClass.tags():
            raise MalformedGrammar(
                f"Rule {rule_name!r}: unrecognized class {value!r} (expected one of {list(LexicalClass.tags())})",
                path=f"{path}.class",
                nonterminal=rule_name,
            )
    elif kind == "empty":
        if value is not True:
            raise MalformedGrammar(
                f"Rule {rule_name!r}: empty marker must be true, got {value!r}",
                path=f"{path}.empty",
                nonterminal=rule_name,
            )
    elif not isinstance(value, str) or not value:
        raise MalformedGrammar(
            f"Rule {rule_name!r}: {kind} must be a non-empty string, got {value!r}",
            path=f"{path}.{kind}",
            nonterminal=rule_name,
        )


def _format_path(parts) -> str:
    """Render a jsonschema path deque as ``rules[0].alternatives[1]``."""
    out = ""
    for part in parts:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def _validate_schema(data: dict[str, Any], name: str) -> None:
    """Run full JSON schema validation, collecting every error."""
    schema = _load_schema(name)
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: _format_path(e.absolute_path))
    if not errors:
        return

    best = jsonschema.exceptions.best_match(errors)
    raise MalformedGrammar(
        f"Schema validation failed: {best.message}",
        path=_format_path(best.absolute_path),
        errors=[f"{_format_path(e.absolute_path) or '<root>'}: {e.message}" for e in errors],
    )
