from queryencoder.datastructures import QueryItem, QueryItems, QueryParams


def test_query_item_str():
    assert str(QueryItem("id", "5")) == "id=5"
    assert str(QueryItem("flag")) == "flag"
    assert str(QueryItem("empty", "")) == "empty="


def test_append_keeps_duplicates_in_order():
    items = QueryItems()
    items.append("id", "1")
    items.append("q", "x")
    items.append("id", "2")

    assert items.items() == [("id", "1"), ("q", "x"), ("id", "2")]
    assert len(items) == 3
    assert items[0] == QueryItem("id", "1")
    assert items.last == QueryItem("id", "2")


def test_merge_last():
    items = QueryItems([("id", "1")])
    items.merge_last("2", "|")

    assert items == [("id", "1|2")]


def test_merge_last_into_a_bare_name():
    items = QueryItems([QueryItem("id")])
    items.merge_last("2", ",")

    assert items == [("id", "2")]


def test_last_of_empty_items():
    assert QueryItems().last is None


def test_copy_is_independent():
    items = QueryItems([("id", "1")])
    copied = items.copy()
    copied.append("id", "2")

    assert items == [("id", "1")]
    assert copied == [("id", "1"), ("id", "2")]


def test_iterating_while_appending():
    items = QueryItems([("a", "1")])

    for item in items:
        items.append(item.name, "2")

    assert items == [("a", "1"), ("a", "2")]


def test_to_multidict():
    params = QueryItems([("id", "1"), ("q", "x"), ("id", "2")]).to_multidict()

    assert isinstance(params, QueryParams)
    assert params.getlist("id") == ["1", "2"]
    assert params.getlist("missing") == []
    assert params["q"] == "x"
    assert params.dict() == {"id": ["1", "2"], "q": ["x"]}
    assert list(params.multi_items()) == [("id", "1"), ("q", "x"), ("id", "2")]


def test_query_params_equality_keeps_order():
    assert QueryParams([("a", "1"), ("b", "2")]) == QueryParams([("a", "1"), ("b", "2")])
    reordered = QueryParams([("b", "2"), ("a", "1")])

    assert (QueryParams([("a", "1"), ("b", "2")]) == reordered) is False


def test_repr():
    assert repr(QueryItems([("id", "1")])) == "QueryItems([('id', '1')])"
