import pytest

from public_suffix_resolver.converter import convert
from public_suffix_resolver.exceptions import InvalidListSource


def test_fixture_sections(psl_text):
    data = convert(psl_text)
    icann = data["ICANN_DOMAINS"]
    private = data["PRIVATE_DOMAINS"]

    assert icann["uk"] == {"ac": {}, "co": {}, "gov": {}}
    assert icann["ck"] == {"*": {}, "www": {"!": {}}}
    assert icann["jp"]["kawasaki"] == {"*": {}, "city": {"!": {}}}
    assert private["io"] == {"github": {}}
    assert private["com"]["amazonaws"] == {"compute": {"*": {}}}
    assert "github" not in icann["io"]


def test_idn_rules_are_stored_as_ascii(psl_text):
    icann = convert(psl_text)["ICANN_DOMAINS"]
    assert "xn--55qx5d" in icann["cn"]
    assert "xn--p1ai" in icann
    assert "рф" not in icann


def test_rules_outside_sections_are_ignored(psl_text):
    data = convert(psl_text)
    assert "outside" not in data["ICANN_DOMAINS"]
    assert "outside" not in data["PRIVATE_DOMAINS"]


def test_only_first_token_is_a_rule(psl_text):
    icann = convert(psl_text)["ICANN_DOMAINS"]
    assert icann["org"] == {}
    assert "this" not in icann


def test_rules_are_lowercased():
    text = "// ===BEGIN ICANN DOMAINS===\nCO.UK\n// ===END ICANN DOMAINS===\n"
    assert convert(text)["ICANN_DOMAINS"] == {"uk": {"co": {}}}


def test_empty_input_has_both_sections():
    assert convert("") == {"ICANN_DOMAINS": {}, "PRIVATE_DOMAINS": {}}


@pytest.mark.parametrize("rule", ["co..uk", "!", "☃.com"])
def test_invalid_rule(rule):
    text = f"// ===BEGIN ICANN DOMAINS===\n{rule}\n// ===END ICANN DOMAINS===\n"
    with pytest.raises(InvalidListSource):
        convert(text)
