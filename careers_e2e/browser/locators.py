"""Element locators and named targets.

A Locator is an immutable (strategy, expression) pair. Compound locators hold
ordered alternatives that are tried left to right; template locators carry
named ``{slot}`` placeholders that are filled in with ``bind()``.
"""

import string
from dataclasses import dataclass, field
from enum import Enum


class Strategy(str, Enum):
    CSS = "css"
    XPATH = "xpath"
    TEXT_MATCH = "text"
    COMPOUND = "compound"


_XPATH_PREFIXES = ("/", "./", "(", "..")


@dataclass(frozen=True)
class Locator:
    """How to find zero or more elements on a page."""

    strategy: Strategy
    expression: str = ""
    alternatives: tuple["Locator", ...] = ()
    param_slots: tuple[str, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        if self.strategy == Strategy.COMPOUND:
            if not self.alternatives:
                msg = "compound locator needs at least one alternative"
                raise ValueError(msg)
            slots: list[str] = []
            for alt in self.alternatives:
                slots.extend(s for s in alt.param_slots if s not in slots)
        else:
            if not self.expression.strip():
                msg = f"{self.strategy.value} locator expression must not be empty"
                raise ValueError(msg)
            slots = _parse_slots(self.expression)
        object.__setattr__(self, "param_slots", tuple(slots))

    # --- constructors ---

    @classmethod
    def css(cls, expression: str) -> "Locator":
        return cls(Strategy.CSS, expression)

    @classmethod
    def xpath(cls, expression: str) -> "Locator":
        return cls(Strategy.XPATH, expression)

    @classmethod
    def text(cls, expression: str) -> "Locator":
        return cls(Strategy.TEXT_MATCH, expression)

    @classmethod
    def any_of(cls, *alternatives: "Locator") -> "Locator":
        return cls(Strategy.COMPOUND, alternatives=tuple(alternatives))

    @classmethod
    def parse(cls, raw: "str | list[str] | tuple[str, ...]") -> "Locator":
        """Build a locator from configuration.

        A list (or tuple) becomes a compound locator. Strings may carry an
        explicit ``css=``, ``xpath=`` or ``text=`` prefix; otherwise anything
        that looks like a path expression is XPath and the rest is CSS.
        """
        if isinstance(raw, (list, tuple)):
            if len(raw) == 1:
                return cls.parse(raw[0])
            return cls.any_of(*(cls.parse(item) for item in raw))

        value = raw.strip()
        for strategy in (Strategy.CSS, Strategy.XPATH, Strategy.TEXT_MATCH):
            prefix = f"{strategy.value}="
            if value.startswith(prefix):
                return cls(strategy, value[len(prefix):])
        if value.startswith(_XPATH_PREFIXES):
            return cls.xpath(value)
        return cls.css(value)

    # --- behaviour ---

    @property
    def is_template(self) -> bool:
        return bool(self.param_slots)

    def candidates(self) -> tuple["Locator", ...]:
        """Flattened alternatives in the order they should be tried."""
        if self.strategy != Strategy.COMPOUND:
            return (self,)
        flat: list[Locator] = []
        for alt in self.alternatives:
            flat.extend(alt.candidates())
        return tuple(flat)

    def bind(self, **values: str) -> "Locator":
        """Fill every template slot and return a new, concrete locator.

        XPath slots receive a quoted XPath string literal, so values holding
        apostrophes stay valid.
        """
        missing = [s for s in self.param_slots if s not in values]
        if missing:
            msg = f"missing values for locator slots: {', '.join(missing)}"
            raise ValueError(msg)
        if self.strategy == Strategy.COMPOUND:
            return Locator.any_of(*(alt.bind(**values) for alt in self.alternatives))
        if not self.param_slots:
            return self
        if self.strategy == Strategy.XPATH:
            rendered = {k: xpath_literal(v) for k, v in values.items()}
        else:
            rendered = dict(values)
        return Locator(self.strategy, self.expression.format(**rendered))

    def selector(self) -> str:
        """Driver selector string for a concrete, non-compound locator."""
        if self.strategy == Strategy.COMPOUND:
            msg = "compound locators have no single selector; iterate candidates()"
            raise ValueError(msg)
        if self.is_template:
            msg = f"template locator '{self.expression}' must be bound first"
            raise ValueError(msg)
        return f"{self.strategy.value}={self.expression}"

    def __str__(self) -> str:
        if self.strategy == Strategy.COMPOUND:
            return " || ".join(str(alt) for alt in self.alternatives)
        return f"{self.strategy.value}={self.expression}"


@dataclass(frozen=True)
class NamedTarget:
    """A locator plus the human-readable name used in logs and screenshots."""

    locator: Locator
    display_name: str

    def bind(self, **values: str) -> "NamedTarget":
        suffix = ", ".join(values.values())
        return NamedTarget(self.locator.bind(**values), f"{self.display_name}: {suffix}")

    def __str__(self) -> str:
        return self.display_name


def target(raw: "str | list[str] | tuple[str, ...]", display_name: str) -> NamedTarget:
    """Shorthand for ``NamedTarget(Locator.parse(raw), display_name)``."""
    return NamedTarget(Locator.parse(raw), display_name)


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


def _parse_slots(expression: str) -> list[str]:
    slots: list[str] = []
    for _, name, _, _ in string.Formatter().parse(expression):
        if name is not None and name not in slots:
            slots.append(name)
    return slots
