import pytest

from minigfx.colors import color_by_name


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("snow", 0xFFFAFA),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("lightgoldenrodyellow", 0xFAFAD2),
    ],
)
def test_known_names(name, value):
    assert color_by_name(name) == value


def test_lookup_ignores_case():
    assert color_by_name("SNOW") == color_by_name("snow")
    assert color_by_name("Ghost White") == color_by_name("ghost white")


def test_none_is_transparent():
    assert color_by_name("none") == -1
    assert color_by_name("NONE") == -1


def test_repeated_name_keeps_first_entry():
    assert color_by_name("dark slate") == 0x2F4F4F
    assert color_by_name("light slate") == 0x778899
    assert color_by_name("light goldenrod") == 0xFAFAD2


def test_spaced_and_joined_names_agree():
    for spaced, joined in [
        ("ghost white", "ghostwhite"),
        ("navy blue", "navyblue"),
        ("hot pink", "hotpink"),
        ("dark red", "darkred"),
    ]:
        assert color_by_name(spaced) == color_by_name(joined)


def test_gray_and_grey_spellings_agree():
    for level in range(101):
        assert color_by_name(f"gray{level}") == color_by_name(f"grey{level}")


def test_gray_ramp_is_increasing_and_neutral():
    values = [color_by_name(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == color_by_name("black")
    assert values[-1] == color_by_name("white")
    for value in values:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert r == g == b


def test_numbered_variant_one_matches_base():
    for base in ["snow", "bisque", "ivory", "azure", "orange", "magenta"]:
        assert color_by_name(f"{base}1") == color_by_name(base)


def test_values_fit_in_24_bits():
    for name in ["snow", "purple", "thistle4", "gray100", "lightgreen"]:
        assert 0 <= color_by_name(name) <= 0xFFFFFF


@pytest.mark.parametrize("name", ["", "not-a-colour", "grey101", "snow "])
def test_unknown_name_raises(name):
    with pytest.raises(KeyError):
        color_by_name(name)