import pytest

from ddl2sql.schema.idents import (
    canonical,
    needs_quote,
    normalize,
    quote_column,
    quote_ident,
    split_qualified,
)


class TestNormalize:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("customers", "customers"),
            ("Customers", "customers"),
            ('"Customers"', "customers"),
            ("public.customers", "customers"),
            ('public."Customers"', "customers"),
            ('"public"."Customers"', "customers"),
            ('"Weird.Name"', "weird.name"),
            ('"sales"."Weird.Name"', "weird.name"),
            ("  orders  ", "orders"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["customers", 'public."Customers"', '"Order Items"', "SALES.Orders"])
    def test_normalize_is_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_more_than_two_segments_kept_whole(self):
        # db.schema.table is not a schema-qualified name in this model
        assert normalize("db.public.orders") == "db.public.orders"

    def test_split_qualified_respects_quotes(self):
        assert split_qualified('"a.b"') == (None, '"a.b"')
        assert split_qualified('"my schema"."T"') == ('"my schema"', '"T"')

    def test_canonical_undoes_escaped_quotes(self):
        assert canonical('"Say ""Hi"""') == 'say "hi"'


class TestQuoting:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("orders", False),
            ("_tmp1", False),
            ("Orders", True),
            ("order items", True),
            ("1st", True),
            ("weird.name", True),
        ],
    )
    def test_needs_quote(self, name, expected):
        assert needs_quote(name) is expected

    def test_quote_ident_simple_name_untouched(self):
        assert quote_ident("customers") == "customers"

    def test_quote_ident_quotes_when_needed(self):
        assert quote_ident("Order Items") == '"Order Items"'

    def test_quote_ident_dotted_quotes_every_segment(self):
        assert quote_ident("public.orders") == '"public"."orders"'

    def test_quote_ident_doubles_embedded_quotes(self):
        assert quote_ident('a"b') == '"a""b"'

    def test_quote_column_always_quotes(self):
        assert quote_column("order_id") == '"order_id"'
        assert quote_column('x"y') == '"x""y"'
