from storefront.catalog.query import run_query, select_featured, summarize


def ids(entries):
    return [e.id for e in entries]


class TestSorting:
    def test_newest_first(self, make_entry):
        t1 = make_entry(id="t1", createdAt="2024-01-01T10:00:00.000Z")
        t2 = make_entry(id="t2", createdAt="2024-01-02T10:00:00.000Z")
        t3 = make_entry(id="t3", createdAt="2024-01-03T10:00:00.000Z")

        assert ids(run_query([t1, t2, t3], sort_by="newest")) == ["t3", "t2", "t1"]

    def test_newest_is_default(self, make_entry):
        old = make_entry(id="old", createdAt="2023-05-01T00:00:00.000Z")
        new = make_entry(id="new", createdAt="2024-05-01T00:00:00.000Z")

        assert ids(run_query([old, new])) == ["new", "old"]

    def test_price_ascending(self, make_entry):
        entries = [make_entry(price=900), make_entry(price=600), make_entry(price=1200)]

        assert [e.price for e in run_query(entries, sort_by="price-asc")] == [600, 900, 1200]

    def test_price_descending(self, make_entry):
        entries = [make_entry(price=900), make_entry(price=600), make_entry(price=1200)]

        assert [e.price for e in run_query(entries, sort_by="price-desc")] == [1200, 900, 600]

    def test_ties_keep_catalog_order(self, make_entry):
        a = make_entry(id="a", price=500, createdAt="2024-01-01T00:00:00.000Z")
        b = make_entry(id="b", price=500, createdAt="2024-01-01T00:00:00.000Z")
        c = make_entry(id="c", price=500, createdAt="2024-01-01T00:00:00.000Z")

        for key in ("newest", "price-asc", "price-desc"):
            assert ids(run_query([a, b, c], sort_by=key)) == ["a", "b", "c"]

    def test_unparseable_timestamp_sorts_last_under_newest(self, make_entry):
        bad = make_entry(id="bad", createdAt="not-a-date")
        ok = make_entry(id="ok", createdAt="2020-01-01T00:00:00.000Z")

        assert ids(run_query([bad, ok], sort_by="newest")) == ["ok", "bad"]


class TestFiltering:
    def test_search_is_case_insensitive_substring(self, make_entry):
        pro = make_entry(id="pro", model="iPhone 14 Pro")
        plain = make_entry(id="plain", model="iPhone 13")

        assert ids(run_query([pro, plain], search="pro")) == ["pro"]
        assert ids(run_query([pro, plain], search="PRO")) == ["pro"]

    def test_search_covers_color_storage_and_description(self, make_entry):
        by_color = make_entry(id="color", color="Deep Purple")
        by_storage = make_entry(id="storage", storage="512GB")
        by_desc = make_entry(id="desc", description="Battery health at 96%")
        other = make_entry(id="other")

        entries = [by_color, by_storage, by_desc, other]
        assert ids(run_query(entries, search="purple")) == ["color"]
        assert ids(run_query(entries, search="512")) == ["storage"]
        assert ids(run_query(entries, search="battery")) == ["desc"]

    def test_condition_filter_is_exact(self, make_entry):
        entries = [
            make_entry(id="g1", condition="Good"),
            make_entry(id="n1", condition="New"),
            make_entry(id="g2", condition="Good"),
            make_entry(id="f1", condition="Fair"),
        ]

        result = run_query(entries, condition="Good", sort_by="price-asc")
        assert ids(result) == ["g1", "g2"]
        assert all(e.condition == "Good" for e in result)

    def test_search_then_condition_then_sort(self, make_entry):
        entries = [
            make_entry(id="a", model="iPhone 14 Pro", condition="Good", price=900),
            make_entry(id="b", model="iPhone 15 Pro", condition="Good", price=700),
            make_entry(id="c", model="iPhone 15 Pro", condition="New", price=100),
            make_entry(id="d", model="iPhone 12", condition="Good", price=50),
        ]

        result = run_query(entries, search="pro", condition="Good", sort_by="price-asc")
        assert ids(result) == ["b", "a"]

    def test_empty_input_and_no_match_both_return_empty(self, make_entry):
        assert run_query([]) == []
        assert run_query([make_entry(model="iPhone 13")], search="galaxy") == []

    def test_input_is_not_modified(self, make_entry):
        entries = [make_entry(price=3), make_entry(price=1), make_entry(price=2)]
        before = ids(entries)

        run_query(entries, search="iphone", sort_by="price-asc")

        assert ids(entries) == before


def test_featured_requires_in_stock(make_entry):
    entries = [
        make_entry(id="yes", featured=True, inStock=True),
        make_entry(id="sold-out", featured=True, inStock=False),
        make_entry(id="plain", featured=False, inStock=True),
    ]

    assert ids(select_featured(entries)) == ["yes"]


def test_summarize_counts(make_entry):
    entries = [
        make_entry(featured=True),
        make_entry(featured=True, inStock=False),
        make_entry(inStock=False),
        make_entry(),
    ]

    stats = summarize(entries)
    assert (stats.total, stats.featured, stats.outOfStock) == (4, 2, 2)
