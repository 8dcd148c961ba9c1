"""
Tests for PostgreSQL statement generation.
"""

from unittest import TestCase
from unittest.mock import patch

from ddl_generator.dialects.postgresql import (
    COLUMN_TYPE_MAP,
    FOREIGN_KEY_ACTION_MAP,
    PostgreSQLDatabase,
    map_column_type,
    map_foreign_key_action,
)
from ddl_generator.domain.models import ColumnType, ForeignKeyAction, ForeignKeyActions
from ddl_generator.exceptions import UnmappedEnumerationError


class TestTypeMapping(TestCase):

    def test_every_column_type_is_mapped(self):
        for column_type in ColumnType:
            self.assertTrue(map_column_type(column_type))

    def test_every_action_is_mapped(self):
        for action in ForeignKeyAction:
            self.assertTrue(map_foreign_key_action(action))

    def test_tokens(self):
        self.assertEqual(map_column_type(ColumnType.AUTO_INCREMENT), "serial")
        self.assertEqual(map_column_type(ColumnType.NUMBER), "integer")
        self.assertEqual(map_column_type(ColumnType.STRING), "varchar")
        self.assertEqual(map_column_type(ColumnType.BOOLEAN), "boolean")
        self.assertEqual(map_column_type(ColumnType.DATE_TIME), "timestamp")
        self.assertEqual(map_column_type(ColumnType.GUID), "uuid")
        self.assertEqual(map_column_type(ColumnType.DECIMAL), "decimal")
        self.assertEqual(map_foreign_key_action(ForeignKeyAction.CASCADE), "CASCADE")
        self.assertEqual(map_foreign_key_action(ForeignKeyAction.SET_NULL), "SET NULL")

    def test_unmapped_values(self):
        with self.assertRaises(UnmappedEnumerationError):
            map_column_type("text")
        with self.assertRaises(UnmappedEnumerationError):
            map_foreign_key_action("restrict")


class TestCreateTables(TestCase):

    def test_create_table_public(self):
        db = PostgreSQLDatabase()
        db.add_table("table1")
        result = db.create()

        self.assertIn("DROP TABLE IF EXISTS table1 CASCADE", result)
        self.assertIn("CREATE TABLE table1()", result)
        self.assertFalse(any(s.startswith("DROP SCHEMA") for s in result))

    def test_create_table_schema(self):
        db = PostgreSQLDatabase()
        db.add_table("table1", "my")
        result = db.create()

        self.assertEqual(
            result,
            [
                "DROP SCHEMA IF EXISTS my CASCADE",
                "CREATE SCHEMA my",
                "DROP TABLE IF EXISTS my.table1 CASCADE",
                "CREATE TABLE my.table1()",
            ],
        )

    def test_schema_rebuilt_once(self):
        db = PostgreSQLDatabase()
        db.add_table("a", "my")
        db.add_table("b", "my")
        result = db.create()
        self.assertEqual(result.count("DROP SCHEMA IF EXISTS my CASCADE"), 1)
        self.assertEqual(result.count("CREATE SCHEMA my"), 1)

    def test_empty_database(self):
        self.assertEqual(PostgreSQLDatabase().create(), [])


class TestCreateConstraints(TestCase):

    def _build(self, schema1=None, schema2=None) -> PostgreSQLDatabase:
        db = PostgreSQLDatabase()
        t1 = db.add_table("table1", schema1)
        t1.primary_key_column("id")
        t1.string_column("email", unique=True)

        t2 = db.add_table("table2", schema2)
        t2.primary_key_column("id")
        t2.reference_column("table1_id", t1, "id")
        return db

    def test_create_constraints_public(self):
        result = self._build().create()

        self.assertEqual(
            result,
            [
                "DROP TABLE IF EXISTS table1 CASCADE",
                "DROP TABLE IF EXISTS table2 CASCADE",
                "CREATE TABLE table1()",
                "ALTER TABLE table1 ADD COLUMN id serial NOT NULL",
                "ALTER TABLE table1 ADD COLUMN email varchar NOT NULL",
                "ALTER TABLE table1 ADD PRIMARY KEY (id)",
                "ALTER TABLE table1 ADD UNIQUE (email)",
                "CREATE TABLE table2()",
                "ALTER TABLE table2 ADD COLUMN id serial NOT NULL",
                "ALTER TABLE table2 ADD COLUMN table1_id integer NOT NULL",
                "ALTER TABLE table2 ADD PRIMARY KEY (id)",
                "ALTER TABLE table2 ADD FOREIGN KEY (table1_id) REFERENCES table1 (id) "
                "ON UPDATE CASCADE ON DELETE CASCADE",
            ],
        )

    def test_create_constraints_schema(self):
        result = self._build("yours", "my").create()

        self.assertEqual(result[:4], [
            "DROP SCHEMA IF EXISTS yours CASCADE",
            "CREATE SCHEMA yours",
            "DROP SCHEMA IF EXISTS my CASCADE",
            "CREATE SCHEMA my",
        ])
        self.assertIn("ALTER TABLE yours.table1 ADD COLUMN id serial NOT NULL", result)
        self.assertIn("ALTER TABLE yours.table1 ADD PRIMARY KEY (id)", result)
        self.assertIn("ALTER TABLE yours.table1 ADD UNIQUE (email)", result)
        self.assertEqual(
            result[-1],
            "ALTER TABLE my.table2 ADD FOREIGN KEY (table1_id) REFERENCES yours.table1 (id) "
            "ON UPDATE CASCADE ON DELETE CASCADE",
        )

    def test_create_is_repeatable(self):
        db = self._build()
        self.assertEqual(db.create(), db.create())

    def test_script(self):
        db = PostgreSQLDatabase()
        db.add_table("t")
        self.assertEqual(db.script(), "DROP TABLE IF EXISTS t CASCADE;\nCREATE TABLE t();\n")


class TestStatementOrdering(TestCase):

    def test_forward_reference(self):
        db = PostgreSQLDatabase()
        orders = db.add_table("orders")
        customers = db.add_table("customers", "crm")
        orders.primary_key_column().reference_column("customer_id", customers, "id")
        customers.primary_key_column()

        result = db.create()
        fkey = (
            "ALTER TABLE orders ADD FOREIGN KEY (customer_id) REFERENCES crm.customers (id) "
            "ON UPDATE CASCADE ON DELETE CASCADE"
        )
        self.assertEqual(result[-1], fkey)
        self.assertLess(
            result.index("ALTER TABLE crm.customers ADD COLUMN id serial NOT NULL"),
            result.index(fkey),
        )

    def test_drops_before_creates_before_foreign_keys(self):
        db = PostgreSQLDatabase()
        a = db.add_table("a")
        b = db.add_table("b")
        a.primary_key_column().reference_column("b_id", b, "id")
        b.primary_key_column().reference_column("a_id", a, "id")

        result = db.create()
        kinds = []
        for statement in result:
            if statement.startswith("DROP"):
                kinds.append(0)
            elif "FOREIGN KEY" in statement:
                kinds.append(2)
            else:
                kinds.append(1)
        self.assertEqual(kinds, sorted(kinds))
        self.assertEqual(kinds.count(2), 2)

    def test_unique_constraints_in_insertion_order(self):
        db = PostgreSQLDatabase()
        t = db.add_table("t")
        t.string_column("a").string_column("b").string_column("c", unique=True)
        t.unique_constraint(["a", "b"])

        result = db.create()
        self.assertEqual(result[-2:], [
            "ALTER TABLE t ADD UNIQUE (c)",
            "ALTER TABLE t ADD UNIQUE (a,b)",
        ])


class TestColumnClauses(TestCase):

    def test_optional_column(self):
        db = PostgreSQLDatabase()
        db.add_table("t").string_column("nickname", required=False)
        self.assertIn("ALTER TABLE t ADD COLUMN nickname varchar", db.create())

    def test_none_flags_keep_not_null(self):
        db = PostgreSQLDatabase()
        db.add_table("t").string_column("s", required=None, unique=None)
        self.assertEqual(db.create(), [
            "DROP TABLE IF EXISTS t CASCADE",
            "CREATE TABLE t()",
            "ALTER TABLE t ADD COLUMN s varchar NOT NULL",
        ])

    def test_default_and_check(self):
        db = PostgreSQLDatabase()
        t = db.add_table("t")
        t.decimal_column("price", required=False, default="0", check="price >= 0")
        t.date_time_column("created", default="now()")
        t.guid_column("token", required=False, default="gen_random_uuid()")

        result = db.create()
        self.assertIn("ALTER TABLE t ADD COLUMN price decimal DEFAULT 0 CHECK (price >= 0)", result)
        self.assertIn("ALTER TABLE t ADD COLUMN created timestamp NOT NULL DEFAULT now()", result)
        self.assertIn("ALTER TABLE t ADD COLUMN token uuid DEFAULT gen_random_uuid()", result)

    def test_composite_primary_key(self):
        db = PostgreSQLDatabase()
        db.add_table("t").primary_key_column("a").primary_key_column("b")
        self.assertIn("ALTER TABLE t ADD PRIMARY KEY (a,b)", db.create())

    def test_no_primary_key_statement_without_key(self):
        db = PostgreSQLDatabase()
        db.add_table("t").boolean_column("flag")
        self.assertFalse(any("PRIMARY KEY" in s for s in db.create()))

    def test_unspecified_action_cascades(self):
        db = PostgreSQLDatabase()
        parent = db.add_table("parent").primary_key_column()
        actions = ForeignKeyActions(on_update=None, on_delete=ForeignKeyAction.SET_NULL)
        db.add_table("child").reference_column("parent_id", parent, "id", actions, required=False)

        self.assertEqual(
            db.create()[-1],
            "ALTER TABLE child ADD FOREIGN KEY (parent_id) REFERENCES parent (id) "
            "ON UPDATE CASCADE ON DELETE SET NULL",
        )

    def test_set_null_actions(self):
        db = PostgreSQLDatabase()
        parent = db.add_table("parent").primary_key_column()
        actions = ForeignKeyActions(ForeignKeyAction.SET_NULL, ForeignKeyAction.SET_NULL)
        db.add_table("child").reference_column("parent_id", parent, "id", actions, required=False)

        self.assertEqual(
            db.create()[-1],
            "ALTER TABLE child ADD FOREIGN KEY (parent_id) REFERENCES parent (id) "
            "ON UPDATE SET NULL ON DELETE SET NULL",
        )


class TestUnmappedValues(TestCase):

    def test_unmapped_column_type_aborts_generation(self):
        db = PostgreSQLDatabase()
        db.add_table("t").string_column("s").number_column("n")

        with patch.dict(COLUMN_TYPE_MAP, {ColumnType.STRING: "varchar"}, clear=True):
            with self.assertRaises(UnmappedEnumerationError) as ctx:
                db.create()
        self.assertEqual(ctx.exception.context["value"], ColumnType.NUMBER)

    def test_unmapped_action_aborts_generation(self):
        db = PostgreSQLDatabase()
        parent = db.add_table("parent").primary_key_column()
        db.add_table("child").reference_column("parent_id", parent, "id")

        with patch.dict(FOREIGN_KEY_ACTION_MAP, {}, clear=True):
            with self.assertRaises(UnmappedEnumerationError):
                db.create()
