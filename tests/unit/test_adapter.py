import pytest

from ddl2sql.api.schema_api import SchemaAPI
from ddl2sql.common.errors import DDL2SQLError, DDLSyntaxError, ErrorCode
from ddl2sql.common.settings import settings
from ddl2sql.schema.adapter import parse_ddl, statements_from_tree
from ddl2sql.schema.statements import (
    AlterTableStatement,
    CreateTableStatement,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    TableName,
)


class TestParseDDL:

    def test_create_table_with_inline_keys(self, mini_ddl):
        statements = parse_ddl(mini_ddl)

        assert [type(s) for s in statements] == [CreateTableStatement, CreateTableStatement]
        customers, orders = statements
        assert customers.table == TableName(name="customers")
        assert customers.columns == ["customer_id", "company_name"]
        assert customers.constraints == [PrimaryKeyConstraint(columns=["customer_id"])]

        assert orders.columns == ["order_id", "customer_id", "order_date"]
        fk = orders.constraints[1]
        assert isinstance(fk, ForeignKeyConstraint)
        assert fk.columns == ["customer_id"]
        assert fk.references == TableName(name="customers")
        assert fk.ref_columns == ["customer_id"]

    def test_table_level_constraints(self, ddl_fixture):
        employees, timesheets = parse_ddl(ddl_fixture("self_fk.sql"))

        assert employees.columns == ["employee_id", "last_name", "manager_id"]
        pk, fk = employees.constraints
        assert pk == PrimaryKeyConstraint(columns=["employee_id"], name="pk_employees")
        assert fk.name == "fk_employees_manager"
        assert fk.references.name == "employees"
        assert fk.ref_columns == ["employee_id"]

        implicit = timesheets.constraints[1]
        assert implicit.references == TableName(name="employees")
        assert implicit.ref_columns == []

    def test_composite_keys(self, ddl_fixture):
        order_lines, shipments = parse_ddl(ddl_fixture("composite_fk.sql"))

        assert order_lines.constraints == [PrimaryKeyConstraint(columns=["order_id", "line_no"])]
        (fk,) = [c for c in shipments.constraints if isinstance(c, ForeignKeyConstraint)]
        assert fk.columns == ["order_id", "line_no"]
        assert fk.ref_columns == ["order_id", "line_no"]

    def test_pg_dump_style_alter_statements(self, ddl_fixture):
        statements = parse_ddl(ddl_fixture("alter_fk_options.sql"))

        creates = [s for s in statements if isinstance(s, CreateTableStatement)]
        alters = [s for s in statements if isinstance(s, AlterTableStatement) and s.constraints]
        assert [s.table.name for s in creates] == ["Customers", "orders"]
        assert [s.table.name for s in alters] == ["Customers", "orders", "orders"]
        assert creates[0].table.schema_name == "sales"
        assert creates[1].columns == ["order_id", "CustomerID", "note"]

        assert alters[1].constraints == [PrimaryKeyConstraint(columns=["order_id"], name="pk_orders")]
        (fk,) = alters[2].constraints
        assert fk.name == "fk_orders_customers"
        assert fk.columns == ["CustomerID"]
        assert fk.references == TableName(schema_name="sales", name="Customers")
        assert fk.ref_columns == ["CustomerID"]

    def test_alter_add_unnamed_primary_key(self):
        (statement,) = parse_ddl("ALTER TABLE orders ADD PRIMARY KEY (order_id);")
        assert statement == AlterTableStatement(
            table=TableName(name="orders"), constraints=[PrimaryKeyConstraint(columns=["order_id"])]
        )

    def test_other_statements_are_ignored(self):
        ddl = """
        CREATE VIEW v AS SELECT 1;
        CREATE INDEX idx ON t (a);
        INSERT INTO t VALUES (1);
        DROP TABLE t;
        """
        assert parse_ddl(ddl) == []

    def test_empty_input(self):
        assert parse_ddl("") == []
        assert parse_ddl("-- nothing here\n") == []

    def test_non_key_constraints_are_skipped(self):
        ddl = """
        CREATE TABLE t (
            id INT,
            code TEXT,
            UNIQUE (code),
            CHECK (id > 0),
            CONSTRAINT uq_code UNIQUE (code)
        );
        """
        (statement,) = parse_ddl(ddl)
        assert statement.columns == ["id", "code"]
        assert statement.constraints == []

    def test_column_named_like_a_keyword_is_kept(self):
        (statement,) = parse_ddl("CREATE TABLE prefs (id INT PRIMARY KEY, key TEXT, note TEXT);")
        assert statement.columns == ["id", "key", "note"]

    def test_quoted_identifiers(self):
        ddl = 'CREATE TABLE "Order Items" ("Unit Price" NUMERIC, "Qty" INT, plain INT);'
        (statement,) = parse_ddl(ddl)
        assert statement.table.name == "Order Items"
        assert statement.columns == ["Unit Price", "Qty", "plain"]

    def test_if_not_exists_and_modifiers(self):
        ddl = "CREATE TEMPORARY TABLE IF NOT EXISTS scratch (id INT);"
        (statement,) = parse_ddl(ddl)
        assert statement.table.name == "scratch"
        assert statement.columns == ["id"]

    def test_column_constraint_name(self):
        ddl = "CREATE TABLE b (a_id INT CONSTRAINT fk_b_a REFERENCES a (id));"
        (statement,) = parse_ddl(ddl)
        assert statement.constraints == [
            ForeignKeyConstraint(
                columns=["a_id"], references=TableName(name="a"), ref_columns=["id"], name="fk_b_a"
            )
        ]

    def test_explicit_dialect(self):
        ddl = "CREATE TABLE `order items` (id INT PRIMARY KEY, `unit price` INT);"
        (statement,) = parse_ddl(ddl, dialect="mysql")
        assert statement.table.name == "order items"
        assert statement.columns == ["id", "unit price"]

    def test_dialect_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "ddl_dialect", "mysql")
        (statement,) = parse_ddl("CREATE TABLE `line items` (id INT);")
        assert statement.table.name == "line items"


class TestSyntaxErrors:

    @pytest.mark.parametrize(
        "ddl",
        [
            "CREATE TABLE orders (id INT, customer_id INT",
            "CREATE TABLE orders (id INT));",
            "CREATE TABLE (id INT);",
            "CREATE TABLE orders (id INT { );",
            "CREATE TABLE x a int;",
            "CREAT TABLE x (a int);",
            "ALTER TABLE orders ADD CONSTRAINT fk FOREIGN KEY (a REFERENCES b (id);",
        ],
    )
    def test_broken_statements_raise(self, ddl):
        with pytest.raises(DDLSyntaxError):
            parse_ddl(ddl)

    def test_syntax_error_is_a_value_error(self):
        with pytest.raises(ValueError) as exc_info:
            parse_ddl("CREATE TABLE orders (id INT")
        assert isinstance(exc_info.value, DDL2SQLError)
        assert "CREATE TABLE orders" in exc_info.value.statement

    @pytest.mark.parametrize("ddl", ["CREATE TABLE x a int;", "CREAT TABLE x (a int);"])
    def test_malformed_ddl_yields_no_graph(self, ddl):
        result = SchemaAPI().build(ddl)
        assert result.graph is None
        assert [e.error_code for e in result.errors] == [ErrorCode.DDL_SYNTAX_ERROR]

    def test_error_stops_the_whole_script(self, mini_ddl):
        result = SchemaAPI().build(mini_ddl + "\nCREATE TABLE broken (id INT;")
        assert result.graph is None


class TestStatementsFromTree:

    def test_create_table_nodes(self):
        tree = [
            {
                "type": "create table",
                "name": {"schema": "public", "name": "orders"},
                "columns": [
                    {"name": {"name": "order_id"}, "constraints": [{"type": "primary key"}]},
                    {
                        "name": {"name": "customer_id"},
                        "constraints": [
                            {
                                "type": "reference",
                                "foreignTable": {"name": "customers"},
                                "foreignColumns": [{"name": "customer_id"}],
                            }
                        ],
                    },
                ],
            }
        ]

        (statement,) = statements_from_tree(tree)

        assert statement.table == TableName(schema_name="public", name="orders")
        assert statement.columns == ["order_id", "customer_id"]
        assert statement.constraints == [
            PrimaryKeyConstraint(columns=["order_id"]),
            ForeignKeyConstraint(
                columns=["customer_id"], references=TableName(name="customers"), ref_columns=["customer_id"]
            ),
        ]

    def test_alter_table_field_name_variants(self):
        tree = [
            {
                "type": "alter table",
                "table": {"name": "orders"},
                "changes": [
                    {
                        "type": "add constraint",
                        "constraint": {
                            "type": "foreign key",
                            "localColumns": [{"name": "customer_id"}],
                            "references": {"foreignTable": {"name": "customers"}, "foreignColumns": ["customer_id"]},
                        },
                    },
                    {
                        "type": "add constraint",
                        "constraint": {
                            "type": "foreign key",
                            "name": {"name": "fk_orders_shippers"},
                            "columns": ["ship_via"],
                            "references": {"table": "shippers", "columns": [{"name": "shipper_id"}]},
                        },
                    },
                    {"type": "add column", "column": {"name": {"name": "x"}}},
                ],
            }
        ]

        (statement,) = statements_from_tree(tree)

        assert isinstance(statement, AlterTableStatement)
        first, second = statement.constraints
        assert first.columns == ["customer_id"]
        assert first.references.name == "customers"
        assert first.ref_columns == ["customer_id"]
        assert second.name == "fk_orders_shippers"
        assert second.columns == ["ship_via"]
        assert second.references.name == "shippers"
        assert second.ref_columns == ["shipper_id"]

    def test_unrecognized_shapes_are_ignored(self):
        tree = [
            None,
            "CREATE TABLE x",
            {"type": "select"},
            {"type": "create table"},
            {"type": "alter table", "table": {}},
        ]
        assert statements_from_tree(tree) == []
