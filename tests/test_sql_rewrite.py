"""
Tests for INFORMATION_SCHEMA qualification.
"""
import pytest

from bigquery_mcp.errors import AmbiguousIntrospection
from bigquery_mcp.sql.rewrite import mentions_information_schema, qualify_information_schema


class TestQualifyInformationSchema:

    def test_qualifies_dataset_reference(self):
        result = qualify_information_schema("SELECT * FROM ds.INFORMATION_SCHEMA.TABLES", "proj")
        assert result == "SELECT * FROM `proj.ds.INFORMATION_SCHEMA.TABLES`"

    def test_unqualified_reference_is_ambiguous(self):
        with pytest.raises(AmbiguousIntrospection, match="dataset"):
            qualify_information_schema("SELECT * FROM INFORMATION_SCHEMA.TABLES", "proj")

    def test_case_insensitive_match(self):
        result = qualify_information_schema(
            "select table_name from sales.information_schema.tables", "proj"
        )
        assert result == "select table_name FROM `proj.sales.INFORMATION_SCHEMA.TABLES`"

    def test_multiple_references(self):
        sql = (
            "SELECT table_name FROM a.INFORMATION_SCHEMA.TABLES "
            "UNION ALL SELECT table_name FROM b.INFORMATION_SCHEMA.TABLES"
        )
        result = qualify_information_schema(sql, "proj")
        assert "FROM `proj.a.INFORMATION_SCHEMA.TABLES`" in result
        assert "FROM `proj.b.INFORMATION_SCHEMA.TABLES`" in result

    def test_one_unqualified_reference_fails_the_whole_query(self):
        sql = (
            "SELECT table_name FROM a.INFORMATION_SCHEMA.TABLES "
            "UNION ALL SELECT table_name FROM INFORMATION_SCHEMA.TABLES"
        )
        with pytest.raises(AmbiguousIntrospection):
            qualify_information_schema(sql, "proj")

    def test_whitespace_after_from(self):
        result = qualify_information_schema("SELECT * FROM\n   ds.INFORMATION_SCHEMA.TABLES", "proj")
        assert result == "SELECT * FROM `proj.ds.INFORMATION_SCHEMA.TABLES`"

    def test_other_views_pass_through(self):
        """Only TABLES is rewritten."""
        sql = "SELECT * FROM ds.INFORMATION_SCHEMA.COLUMNS"
        assert qualify_information_schema(sql, "proj") == sql

    def test_unqualified_other_view_passes_through(self):
        sql = "SELECT * FROM INFORMATION_SCHEMA.SCHEMATA"
        assert qualify_information_schema(sql, "proj") == sql

    def test_no_introspection(self):
        sql = "SELECT * FROM ds.orders"
        assert qualify_information_schema(sql, "proj") == sql


class TestMentionsInformationSchema:

    def test_detects_any_case(self):
        assert mentions_information_schema("select * from ds.information_schema.tables")
        assert mentions_information_schema("SELECT * FROM ds.INFORMATION_SCHEMA.COLUMNS")

    def test_plain_query(self):
        assert not mentions_information_schema("SELECT * FROM ds.orders")
        assert not mentions_information_schema("")
