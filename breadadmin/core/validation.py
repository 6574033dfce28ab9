# -*- coding: utf-8 -*-
"""
validation

Rule based validation of submitted BREAD data.

Rules use the ``name:arg1,arg2`` notation stored in layouts. Attribute keys
may be dotted (``bio.en``) to reach into nested submitted values.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from pydantic import AnyUrl, EmailStr, TypeAdapter, ValidationError

from ..schema.descriptors import Layout
from .context import BreadContext
from .exceptions import ValidationFailed

_MISSING = object()

EMAIL_ADAPTER = TypeAdapter(EmailStr)
URL_ADAPTER = TypeAdapter(AnyUrl)

ALPHA_RE = re.compile(r"^[^\W\d_]+$")
ALPHA_NUM_RE = re.compile(r"^[^\W_]+$")
ALPHA_DASH_RE = re.compile(r"^[\w-]+$")

DEFAULT_MESSAGES: Dict[str, str] = {
    "required": "The {attribute} field is required.",
    "string": "The {attribute} must be a string.",
    "numeric": "The {attribute} must be a number.",
    "integer": "The {attribute} must be an integer.",
    "boolean": "The {attribute} field must be true or false.",
    "email": "The {attribute} must be a valid email address.",
    "url": "The {attribute} format is invalid.",
    "min": "The {attribute} must be at least {0}.",
    "max": "The {attribute} may not be greater than {0}.",
    "between": "The {attribute} must be between {0} and {1}.",
    "in": "The selected {attribute} is invalid.",
    "not_in": "The selected {attribute} is invalid.",
    "regex": "The {attribute} format is invalid.",
    "alpha": "The {attribute} may only contain letters.",
    "alpha_num": "The {attribute} may only contain letters and numbers.",
    "alpha_dash": "The {attribute} may only contain letters, numbers, dashes and underscores.",
}


def parse_rule(rule: str) -> Tuple[str, List[str]]:
    """Split ``max:255`` into ``("max", ["255"])``; ``regex`` keeps its pattern whole."""
    name, _, raw = rule.partition(":")
    name = name.strip()
    if not raw:
        return name, []
    if name == "regex":
        return name, [raw]
    return name, [arg.strip() for arg in raw.split(",")]


def lookup(data: Any, key: str) -> Any:
    """Resolve dotted ``key`` in nested mappings; ``_MISSING`` when absent."""
    current = data
    for part in key.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return _MISSING
    return current


def _is_empty(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, dict)) and not value:
        return True
    return False


def _conforms(adapter: TypeAdapter, value: Any) -> bool:
    """Whether the string ``value`` passes pydantic validation for ``adapter``."""
    if not isinstance(value, str):
        return False
    try:
        adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    try:
        float(str(value))
    except ValueError:
        return False
    return True


class Validator:
    """Check ``data`` against ``rules`` using custom ``messages`` where given.

    Validation runs lazily on the first call to :meth:`fails`, :meth:`passes`,
    :meth:`errors` or :meth:`validate`.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Sequence[str]],
        messages: Mapping[str, str] | None = None,
    ) -> None:
        self.data = data
        self.rules = {key: list(value) for key, value in rules.items()}
        self.messages = dict(messages or {})
        self._errors: Dict[str, List[str]] | None = None
        self._checks: Dict[str, Callable[[Any, List[str], List[str]], bool]] = {
            "string": lambda v, a, r: isinstance(v, str),
            "numeric": lambda v, a, r: _is_number(v),
            "integer": self._check_integer,
            "boolean": lambda v, a, r: v in (True, False, 0, 1, "0", "1", "true", "false"),
            "email": lambda v, a, r: _conforms(EMAIL_ADAPTER, v),
            "url": lambda v, a, r: _conforms(URL_ADAPTER, v),
            "min": lambda v, a, r: self._size(v, r) >= float(a[0]),
            "max": lambda v, a, r: self._size(v, r) <= float(a[0]),
            "between": lambda v, a, r: float(a[0]) <= self._size(v, r) <= float(a[1]),
            "in": lambda v, a, r: str(v) in a,
            "not_in": lambda v, a, r: str(v) not in a,
            "regex": lambda v, a, r: bool(re.search(self._pattern(a[0]), str(v))),
            "alpha": lambda v, a, r: isinstance(v, str) and bool(ALPHA_RE.match(v)),
            "alpha_num": lambda v, a, r: isinstance(v, str) and bool(ALPHA_NUM_RE.match(v)),
            "alpha_dash": lambda v, a, r: isinstance(v, str) and bool(ALPHA_DASH_RE.match(v)),
        }

    # --- checks -----------------------------------------------------------

    @staticmethod
    def _check_integer(value: Any, args: List[str], rule_names: List[str]) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(re.fullmatch(r"[+-]?\d+", value.strip()))

    @staticmethod
    def _size(value: Any, rule_names: List[str]) -> float:
        if ("numeric" in rule_names or "integer" in rule_names) and _is_number(value):
            return float(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, (str, list, tuple, dict)):
            return float(len(value))
        return float(len(str(value)))

    @staticmethod
    def _pattern(raw: str) -> str:
        """Accept delimited patterns such as ``/^a+$/``."""
        if len(raw) >= 2 and raw[0] == "/" and raw.rfind("/") > 0:
            return raw[1 : raw.rfind("/")]
        return raw

    # --- running ------------------------------------------------------------

    def _message(self, attribute: str, rule: str, args: List[str]) -> str:
        custom = self.messages.get(f"{attribute}.{rule}")
        if custom:
            return custom
        template = DEFAULT_MESSAGES.get(rule, "The {attribute} is invalid.")
        return template.format(*args, attribute=attribute.replace("_", " "))

    def _run(self) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for attribute, rules in self.rules.items():
            parsed = [parse_rule(rule) for rule in rules]
            rule_names = [name for name, _ in parsed]
            value = lookup(self.data, attribute)
            for name, args in parsed:
                if name == "nullable":
                    continue
                if name == "required":
                    if _is_empty(value):
                        errors.setdefault(attribute, []).append(self._message(attribute, name, args))
                        break
                    continue
                if _is_empty(value):
                    continue
                check = self._checks.get(name)
                if check is None:
                    raise ValueError(f"Unsupported validation rule {name!r} on {attribute!r}")
                if not check(value, args, rule_names):
                    errors.setdefault(attribute, []).append(self._message(attribute, name, args))
        return errors

    def errors(self) -> Dict[str, List[str]]:
        if self._errors is None:
            self._errors = self._run()
        return self._errors

    def fails(self) -> bool:
        return bool(self.errors())

    def passes(self) -> bool:
        return not self.fails()

    def validate(self) -> Mapping[str, Any]:
        """Return the data or raise :class:`ValidationFailed`."""
        if self.fails():
            raise ValidationFailed(self.errors())
        return self.data


def build_rules(layout: Layout, context: BreadContext) -> Tuple[Dict[str, List[str]], Dict[str, str]]:
    """Collect rule lists and messages for every formfield of ``layout``.

    Translatable formfields are keyed ``column.<locale>`` with messages keyed
    ``column.<locale>.<rule>``; all others use ``column`` and ``column.<rule>``.
    """
    locale = context.get_locale()
    fallback = context.get_fallback_locale()
    rules: Dict[str, List[str]] = {}
    messages: Dict[str, str] = {}
    for formfield in layout.get_formfields():
        translatable = layout.is_formfield_translatable(formfield.column)
        formfield_rules: List[str] = []
        for rule_object in formfield.rules:
            formfield_rules.append(rule_object.rule)
            if translatable:
                message_ident = f"{formfield.column}.{locale}.{rule_object.name}"
            else:
                message_ident = f"{formfield.column}.{rule_object.name}"
            messages[message_ident] = rule_object.resolve_message(locale, fallback)
        if translatable:
            rules[f"{formfield.column}.{locale}"] = formfield_rules
        else:
            rules[formfield.column] = formfield_rules
    return rules, messages


def build_validator(layout: Layout, data: Mapping[str, Any], context: BreadContext) -> Validator:
    rules, messages = build_rules(layout, context)
    return Validator(data, rules, messages)


__all__ = ["Validator", "build_rules", "build_validator", "parse_rule", "lookup"]

# The End
