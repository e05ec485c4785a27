"""
Composable element locators.

A `Locator` is an immutable description of how to find an element. Building
one never touches a page or a device; it only compiles to an XPath string when
a helper asks for it:

    locate("input").with_attr({"placeholder": "Email"}).at(1).to_xpath()
    -> '(//input[@placeholder=\'Email\'])[1]'

Every value interpolated into the XPath goes through `xpath_literal`, so text
containing quote characters cannot break the expression.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Union

REPLACE_TOKEN = "REPLACE_LOCATOR"

_CSS_SHORTHAND = re.compile(r"^(?P<tag>[A-Za-z][\w-]*|\*)?(?P<rest>(?:[.#][\w-]+)*)$")
_CSS_PART = re.compile(r"([.#])([\w-]+)")


def xpath_literal(value: Any) -> str:
    text = str(value)
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    pieces = text.split("'")
    joined = ", \"'\", ".join(f"'{piece}'" for piece in pieces)
    return f"concat({joined})"


def is_raw_xpath(selector: str) -> bool:
    return selector.startswith(("/", "(", "./"))


def _class_predicate(class_name: str) -> str:
    return f"[contains(concat(' ', normalize-space(@class), ' '), {xpath_literal(f' {class_name} ')})]"


def _base_xpath(base: str) -> str:
    selector = base.strip()
    if not selector:
        raise ValueError("locator base must be a non-empty string")
    if is_raw_xpath(selector):
        return selector

    match = _CSS_SHORTHAND.match(selector)
    if match is None or not (match.group("tag") or match.group("rest")):
        raise ValueError(
            f"Unsupported locator base {base!r}; use a tag, tag.class, #id or an XPath expression"
        )
    xpath = f"//{match.group('tag') or '*'}"
    for kind, name in _CSS_PART.findall(match.group("rest") or ""):
        if kind == ".":
            xpath += _class_predicate(name)
        else:
            xpath += f"[@id={xpath_literal(name)}]"
    return xpath


def _descendant(xpath: str, *, context: str) -> str:
    if xpath.startswith("("):
        raise ValueError(f"{context}: a positional locator cannot be nested; call at() after composing")
    if xpath.startswith("./"):
        return xpath[1:]
    if xpath.startswith("/"):
        return xpath
    return f"//{xpath}"


@dataclass(frozen=True)
class Locator:
    base: str
    operations: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def by_tag(cls, tag: str) -> "Locator":
        return cls(base=tag)

    def _with(self, kind: str, payload: Any) -> "Locator":
        return Locator(base=self.base, operations=self.operations + ((kind, payload),))

    def with_attr(self, attrs: Mapping[str, Any]) -> "Locator":
        if not attrs:
            raise ValueError("with_attr() needs at least one attribute")
        return self._with("attr", tuple(sorted((str(k), str(v)) for k, v in attrs.items())))

    def with_text(self, text: Any, *, exact: bool = False) -> "Locator":
        return self._with("text", (str(text), exact))

    def at(self, position: int) -> "Locator":
        index = int(position)
        if index < 1:
            raise ValueError(f"at() position is 1-based, got {position!r}")
        return self._with("at", index)

    def find(self, child: Union[str, "Locator"]) -> "Locator":
        return self._with("find", child if isinstance(child, Locator) else Locator(base=child))

    def inside(self, container: Union[str, "Locator"]) -> "Locator":
        return self._with("inside", container if isinstance(container, Locator) else Locator(base=container))

    def to_xpath(self) -> str:
        xpath = _base_xpath(self.base)
        for kind, payload in self.operations:
            if kind == "attr":
                for name, value in payload:
                    xpath += f"[@{name}={xpath_literal(value)}]"
            elif kind == "text":
                text, exact = payload
                if exact:
                    xpath += f"[normalize-space(.)={xpath_literal(text)}]"
                else:
                    xpath += f"[contains(normalize-space(.), {xpath_literal(text)})]"
            elif kind == "at":
                xpath = f"({xpath})[{payload}]"
            elif kind == "find":
                xpath += _descendant(payload.to_xpath(), context="find()")
            elif kind == "inside":
                xpath = payload.to_xpath() + _descendant(xpath, context="inside()")
            else:
                raise ValueError(f"Unknown locator operation {kind!r}")
        return xpath

    def __str__(self) -> str:
        return self.to_xpath()


def locate(base: str) -> Locator:
    return Locator(base=base)


LocatorLike = Union[str, Locator, Mapping[str, str]]


def fill_template(template: str, value: Any) -> str:
    """
    Substitute REPLACE_LOCATOR in a custom locator template.

    A quoted placeholder ('REPLACE_LOCATOR' or "REPLACE_LOCATOR") is replaced
    together with its quotes by a safe XPath literal; a bare placeholder (for
    example an index inside [...]) is replaced verbatim.
    """
    if REPLACE_TOKEN not in template:
        raise ValueError(f"Template has no {REPLACE_TOKEN} placeholder: {template!r}")
    literal = xpath_literal(value)
    rendered = template.replace(f"'{REPLACE_TOKEN}'", literal).replace(f'"{REPLACE_TOKEN}"', literal)
    return rendered.replace(REPLACE_TOKEN, str(value))


def to_xpath(locator: LocatorLike) -> str:
    """Compile a locator to XPath; plain strings are returned verbatim."""
    if isinstance(locator, Locator):
        return locator.to_xpath()
    if isinstance(locator, str):
        return locator
    if isinstance(locator, Mapping):
        if "xpath" in locator:
            return str(locator["xpath"])
        if "id" in locator:
            return f"//*[@id={xpath_literal(locator['id'])}]"
    raise ValueError(f"Unsupported locator: {locator!r}")
