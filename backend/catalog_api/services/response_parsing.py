"""Parsing of untrusted provider text into validated shapes

Every parser returns either ``Parsed(value)`` or ``ParseFailure(reason)``;
nothing here raises on bad input.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)
V = TypeVar("V")


@dataclass(frozen=True)
class Parsed(Generic[V]):
    value: V


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = Union[Parsed, ParseFailure]


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present"""

    text = text.strip()
    if not text.startswith("```"):
        return text
    text = text[3:]
    for lang in ("json", "JSON"):
        if text.startswith(lang):
            text = text[len(lang):]
            break
    text = text.lstrip("\n")
    return text.rsplit("```", 1)[0].strip()


def _load_json(text: str) -> Union[Parsed, ParseFailure]:
    try:
        return Parsed(json.loads(strip_code_fence(text)))
    except (ValueError, RecursionError, TypeError) as exc:
        # ValueError covers JSONDecodeError and oversized integer literals
        return ParseFailure(f"invalid JSON: {type(exc).__name__}: {exc}")


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


def parse_object(text: str, model: Type[M]) -> ParseResult:
    """Parse a JSON object and validate it against ``model``"""

    loaded = _load_json(text)
    if isinstance(loaded, ParseFailure):
        return loaded
    if not isinstance(loaded.value, dict):
        return ParseFailure(f"expected a JSON object, got {type(loaded.value).__name__}")

    try:
        return Parsed(model.model_validate(loaded.value))
    except ValidationError as exc:
        return ParseFailure(_describe(exc))


def parse_array(text: str, model: Type[M]) -> ParseResult:
    """Parse a JSON array whose every element validates against ``model``"""

    loaded = _load_json(text)
    if isinstance(loaded, ParseFailure):
        return loaded
    if not isinstance(loaded.value, list):
        return ParseFailure(f"expected a JSON array, got {type(loaded.value).__name__}")

    values: List[M] = []
    for index, element in enumerate(loaded.value):
        if not isinstance(element, dict):
            return ParseFailure(f"element {index} is not an object")
        try:
            values.append(model.model_validate(element))
        except ValidationError as exc:
            return ParseFailure(f"element {index}: {_describe(exc)}")
    return Parsed(values)


def parse_name_list(text: Any) -> ParseResult:
    """
    Parse a comma-separated list of names

    Leading list markers ("-", "*") are stripped and blank entries dropped;
    an empty answer is a valid empty list.
    """

    if not isinstance(text, str):
        return ParseFailure("expected text")

    names = []
    for raw in text.split(","):
        name = raw.strip().lstrip("-*").strip().strip('"\'')
        if name:
            names.append(name)
    return Parsed(names)
