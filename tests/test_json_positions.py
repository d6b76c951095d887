from schemavalidator.core.utils.json_positions import index_positions, locate

DOC = """{
  "name": "Alice",
  "age": "thirty",
  "tags": [1, {"k": null}],
  "empty": {}
}"""


def test_scalar_positions_point_at_last_token_char():
    pos = index_positions(DOC)
    assert pos[("name",)] == (2, 17)
    assert pos[("age",)] == (3, 17)


def test_container_positions_point_at_opening_bracket():
    pos = index_positions(DOC)
    assert pos[()] == (1, 1)
    assert pos[("tags",)] == (4, 11)
    assert pos[("tags", 0)] == (4, 12)
    assert pos[("tags", 1)] == (4, 15)
    assert pos[("tags", 1, "k")] == (4, 24)
    assert pos[("empty",)] == (5, 12)


def test_root_scalar():
    assert index_positions("  42 ") == {(): (1, 4)}


def test_escaped_keys_and_strings():
    pos = index_positions('{"a\\"b": "x\\ny"}')
    assert pos[('a"b',)] == (1, 15)


def test_duplicate_key_last_wins():
    pos = index_positions('{"a": 1,\n "a": 2}')
    assert pos[("a",)] == (2, 7)


def test_locate_falls_back_to_ancestor():
    pos = index_positions('{"a": {"b": 1}}')
    assert locate(pos, ("a", "missing")) == pos[("a",)]
    assert locate(pos, ()) == (1, 1)
    assert locate({}, ("x",)) == (1, 1)
