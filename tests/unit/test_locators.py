"""Tests for locators: parsing, compound flattening, template binding."""

import pytest

from careers_e2e.browser.locators import Locator, NamedTarget, Strategy, target, xpath_literal

# ---------------------------------------------------------------------------
# TestLocatorParse
# ---------------------------------------------------------------------------


class TestLocatorParse:
    """Locator.parse: strategy detection from raw config values."""

    def test_plain_string_is_css(self) -> None:
        loc = Locator.parse("#jobs-list > div")
        assert loc.strategy == Strategy.CSS
        assert loc.expression == "#jobs-list > div"

    @pytest.mark.parametrize("raw", ["//a", ".//span", "(//a)[1]", "../div"])
    def test_path_expressions_are_xpath(self, raw: str) -> None:
        assert Locator.parse(raw).strategy == Strategy.XPATH

    def test_explicit_prefixes(self) -> None:
        assert Locator.parse("xpath=a").strategy == Strategy.XPATH
        assert Locator.parse("css=//odd").strategy == Strategy.CSS
        text = Locator.parse("text=See all QA jobs")
        assert text.strategy == Strategy.TEXT_MATCH
        assert text.expression == "See all QA jobs"

    def test_list_becomes_compound(self) -> None:
        loc = Locator.parse(["#a", "//b"])
        assert loc.strategy == Strategy.COMPOUND
        assert [c.strategy for c in loc.candidates()] == [Strategy.CSS, Strategy.XPATH]

    def test_single_item_list_is_unwrapped(self) -> None:
        assert Locator.parse(["#a"]) == Locator.css("#a")

    def test_empty_expression_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            Locator.parse("   ")

    def test_compound_without_alternatives_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one alternative"):
            Locator.any_of()


# ---------------------------------------------------------------------------
# TestCandidates
# ---------------------------------------------------------------------------


class TestCandidates:
    def test_nested_compound_is_flattened_in_order(self) -> None:
        inner = Locator.any_of(Locator.css("#b"), Locator.css("#c"))
        loc = Locator.any_of(Locator.css("#a"), inner, Locator.xpath("//d"))
        assert [c.expression for c in loc.candidates()] == ["#a", "#b", "#c", "//d"]

    def test_simple_locator_is_its_own_candidate(self) -> None:
        loc = Locator.css("#a")
        assert loc.candidates() == (loc,)


# ---------------------------------------------------------------------------
# TestTemplates
# ---------------------------------------------------------------------------


class TestTemplates:
    """{slot} placeholders: detection and binding."""

    def test_slots_detected(self) -> None:
        loc = Locator.xpath("//option[contains(text(), {value})]")
        assert loc.param_slots == ("value",)
        assert loc.is_template

    def test_compound_collects_slots_once(self) -> None:
        loc = Locator.any_of(Locator.xpath("//a[.={value}]"), Locator.css("[data-v='{value}']"))
        assert loc.param_slots == ("value",)

    def test_xpath_binding_quotes_value(self) -> None:
        bound = Locator.xpath("//option[contains(text(), {value})]").bind(value="Istanbul, Turkey")
        assert bound.expression == "//option[contains(text(), 'Istanbul, Turkey')]"
        assert not bound.is_template

    def test_xpath_binding_handles_apostrophe(self) -> None:
        bound = Locator.xpath("//a[.={value}]").bind(value="Côte d'Ivoire")
        assert bound.expression == '//a[.="Côte d\'Ivoire"]'

    def test_css_binding_is_verbatim(self) -> None:
        bound = Locator.css("[data-v='{value}']").bind(value="QA")
        assert bound.expression == "[data-v='QA']"

    def test_missing_value_raises(self) -> None:
        with pytest.raises(ValueError, match="missing values"):
            Locator.xpath("//a[.={value}]").bind(other="x")

    def test_binding_concrete_locator_returns_same(self) -> None:
        loc = Locator.css("#a")
        assert loc.bind(value="x") is loc

    def test_bound_compound_binds_every_alternative(self) -> None:
        loc = Locator.parse(["//a[.={value}]", "//b[.={value}]"]).bind(value="QA")
        assert [c.expression for c in loc.candidates()] == ["//a[.='QA']", "//b[.='QA']"]


# ---------------------------------------------------------------------------
# TestSelector
# ---------------------------------------------------------------------------


class TestSelector:
    def test_selector_carries_strategy_prefix(self) -> None:
        assert Locator.css("#a").selector() == "css=#a"
        assert Locator.xpath("//a").selector() == "xpath=//a"
        assert Locator.text("Careers").selector() == "text=Careers"

    def test_unbound_template_has_no_selector(self) -> None:
        with pytest.raises(ValueError, match="must be bound"):
            Locator.xpath("//a[.={value}]").selector()

    def test_compound_has_no_single_selector(self) -> None:
        with pytest.raises(ValueError, match="candidates"):
            Locator.parse(["#a", "#b"]).selector()

    def test_str_of_compound_lists_alternatives(self) -> None:
        assert str(Locator.parse(["#a", "//b"])) == "css=#a || xpath=//b"


# ---------------------------------------------------------------------------
# TestNamedTarget
# ---------------------------------------------------------------------------


class TestNamedTarget:
    def test_target_shorthand(self) -> None:
        t = target("#jobs-list", "Job List Container")
        assert t == NamedTarget(Locator.css("#jobs-list"), "Job List Container")
        assert str(t) == "Job List Container"

    def test_bind_extends_display_name(self) -> None:
        t = target("//option[contains(text(), {value})]", "Location Option")
        bound = t.bind(value="Istanbul, Turkey")
        assert bound.display_name == "Location Option: Istanbul, Turkey"
        assert not bound.locator.is_template


# ---------------------------------------------------------------------------
# TestXpathLiteral
# ---------------------------------------------------------------------------


class TestXpathLiteral:
    def test_plain(self) -> None:
        assert xpath_literal("QA") == "'QA'"

    def test_single_quote_uses_double_quotes(self) -> None:
        assert xpath_literal("it's") == '"it\'s"'

    def test_both_quotes_use_concat(self) -> None:
        assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"
