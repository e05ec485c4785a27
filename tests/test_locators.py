"""Tests for the locator builder."""
import pytest

from automation_suite.locators import Locator, fill_template, is_raw_xpath, locate, to_xpath, xpath_literal


def test_tag_with_attribute():
    """Test a tag narrowed by an attribute."""
    assert locate("input").with_attr({"placeholder": "Email"}).to_xpath() == "//input[@placeholder='Email']"


def test_at_wraps_whole_expression():
    """Test that at() picks the nth match of the whole expression."""
    xpath = locate("input").with_attr({"placeholder": "Email"}).at(2).to_xpath()
    assert xpath == "(//input[@placeholder='Email'])[2]"


def test_with_text_contains_and_exact():
    """Test partial and exact text matching."""
    assert locate("span").with_text("Save").to_xpath() == "//span[contains(normalize-space(.), 'Save')]"
    assert locate("span").with_text("Save", exact=True).to_xpath() == "//span[normalize-space(.)='Save']"


def test_find_descends_into_child():
    """Test composing a parent with a descendant."""
    xpath = locate("mat-option").find(locate("span").with_text("Canada")).to_xpath()
    assert xpath == "//mat-option//span[contains(normalize-space(.), 'Canada')]"


def test_inside_prefixes_container():
    """Test scoping a locator to a container."""
    xpath = locate("button").inside(locate("div").with_attr({"role": "dialog"})).to_xpath()
    assert xpath == "//div[@role='dialog']//button"


def test_class_and_id_shorthand():
    """Test tag.class and #id bases."""
    assert locate("div.mat-tab-links").to_xpath() == (
        "//div[contains(concat(' ', normalize-space(@class), ' '), ' mat-tab-links ')]"
    )
    assert locate("#login").to_xpath() == "//*[@id='login']"


def test_raw_xpath_passes_through():
    """Test that an XPath base is used verbatim."""
    assert locate("//jhi-rate-line[1]").to_xpath() == "//jhi-rate-line[1]"
    assert is_raw_xpath("(//a)[1]")
    assert not is_raw_xpath("Login")


def test_locators_are_values():
    """Test that equal descriptions compare equal and builders do not mutate."""
    base = locate("input")
    narrowed = base.with_attr({"name": "q"})
    assert base == Locator(base="input")
    assert narrowed == locate("input").with_attr({"name": "q"})
    assert base.operations == ()


def test_text_with_quotes_is_escaped():
    """Test that quote characters cannot break the expression."""
    assert xpath_literal("O'Brien") == '"O\'Brien"'
    assert xpath_literal("say \"hi\" it's") == "concat('say \"hi\" it', \"'\", 's')"
    assert locate("span").with_text("O'Brien", exact=True).to_xpath() == "//span[normalize-space(.)=\"O'Brien\"]"


def test_invalid_positions_and_bases():
    """Test validation of positions and unsupported bases."""
    with pytest.raises(ValueError):
        locate("input").at(0)
    with pytest.raises(ValueError):
        locate("input").with_attr({})
    with pytest.raises(ValueError):
        locate("input[name=q]").to_xpath()
    with pytest.raises(ValueError):
        locate("div").find(locate("span").at(1)).to_xpath()


def test_fill_template_quoted_and_bare():
    """Test REPLACE_LOCATOR substitution."""
    assert fill_template("//span[text()='REPLACE_LOCATOR']", "Save") == "//span[text()='Save']"
    assert fill_template("//span[text()='REPLACE_LOCATOR']", "It's") == "//span[text()=\"It's\"]"
    assert fill_template("(//span[@class='box'])[REPLACE_LOCATOR]", 3) == "(//span[@class='box'])[3]"
    with pytest.raises(ValueError):
        fill_template("//span", "x")


def test_to_xpath_accepts_mappings():
    """Test compiling id and xpath mappings."""
    assert to_xpath({"id": "app__logout"}) == "//*[@id='app__logout']"
    assert to_xpath({"xpath": "//a"}) == "//a"
    assert to_xpath(locate("a")) == "//a"
    with pytest.raises(ValueError):
        to_xpath({"css": "a"})


def test_attribute_order_does_not_matter():
    """Test that the same attributes in any order build the same locator."""
    first = locate("input").with_attr({"name": "q", "type": "search"})
    second = locate("input").with_attr({"type": "search", "name": "q"})
    assert first == second
    assert first.to_xpath() == "//input[@name='q'][@type='search']"
