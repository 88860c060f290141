import pytest

from unimft.jsontree import INT_MAX, INT_MIN, JsonType, JsonValue, is_integer_text


def number(text, name=None):
    return JsonValue(JsonType.NUMBER, text, name)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", True),
        ("-17", True),
        ("+5", True),
        ("123456789", True),
        ("1.5", False),
        ("-0.25", False),
        ("1e3", False),
        ("2E-4", False),
        ("-7e+2", False),
    ],
)
def test_is_integer_text(text, expected):
    assert is_integer_text(text) is expected


def test_default_value_is_null():
    value = JsonValue()
    assert value.kind is JsonType.NULL
    assert value.value is None
    assert value.name is None


def test_update_integer():
    node = number("42")
    result = node.update()
    assert result is node
    assert node.kind is JsonType.INT
    assert node.value == 42


def test_update_negative_integer():
    node = number("-17").update()
    assert node.kind is JsonType.INT
    assert node.value == -17


def test_update_negative_zero_is_integer():
    node = number("-0").update()
    assert node.kind is JsonType.INT
    assert node.value == 0


@pytest.mark.parametrize("text", ["1.5", "-0.25", "1e3", "2E-4", "6.02e23"])
def test_update_real(text):
    node = number(text).update()
    assert node.kind is JsonType.REAL
    assert node.value == float(text)


def test_update_clamps_large_integers():
    big = number("99999999999999999999999").update()
    small = number("-99999999999999999999999").update()
    assert big.value == INT_MAX
    assert small.value == INT_MIN
    assert INT_MAX == 2**63 - 1


def test_update_keeps_integer_at_limit():
    node = number(str(INT_MAX)).update()
    assert node.value == INT_MAX


@pytest.mark.parametrize(
    "node",
    [
        JsonValue(JsonType.STRING, "12"),
        JsonValue(JsonType.TRUE),
        JsonValue(JsonType.FALSE),
        JsonValue(JsonType.NULL),
    ],
)
def test_update_leaves_other_kinds_alone(node):
    kind, value = node.kind, node.value
    node.update()
    assert node.kind is kind
    assert node.value == value


def test_update_recurses_into_containers():
    inner = JsonValue(JsonType.ARRAY, [number("3"), number("0.5")], "list")
    root = JsonValue(
        JsonType.OBJECT,
        [number("7", "version"), inner, JsonValue(JsonType.STRING, "9", "label")],
    )
    root.update()
    version, lst, label = root.value
    assert (version.kind, version.value, version.name) == (JsonType.INT, 7, "version")
    assert lst.name == "list"
    assert [c.kind for c in lst.value] == [JsonType.INT, JsonType.REAL]
    assert [c.value for c in lst.value] == [3, 0.5]
    assert (label.kind, label.value) == (JsonType.STRING, "9")


def test_update_is_idempotent():
    root = JsonValue(JsonType.ARRAY, [number("5"), number("2.5")])
    root.update()
    first = [(c.kind, c.value) for c in root.value]
    root.update()
    assert [(c.kind, c.value) for c in root.value] == first


def test_update_empty_containers():
    for kind in (JsonType.ARRAY, JsonType.OBJECT):
        node = JsonValue(kind, [])
        assert node.update().value == []