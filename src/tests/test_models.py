"""
Tests for query normalization and user models.

Tests validate:
- top clamping into [1, 100] with fallback to 10
- select splitting and blank entry removal
- search quoting and the eventual consistency header
- UserDetail sign-in activity handling
"""

import pytest

from graph.models import QuerySpec, UserDetail, UserSummary, split_select


class TestQuerySpecTop:
    """Page size normalization tests."""

    @pytest.mark.parametrize("top", [0, -5, 101, 1000])
    def test_out_of_range_top_resets_to_default(self, top):
        assert QuerySpec(top=top).top == 10

    @pytest.mark.parametrize("top", [1, 25, 100])
    def test_in_range_top_is_kept(self, top):
        assert QuerySpec(top=top).top == top

    def test_non_numeric_top_resets_to_default(self):
        assert QuerySpec(top="lots").top == 10

    def test_default_top(self):
        assert QuerySpec().top == 10


class TestQuerySpecSelect:
    """Select list parsing tests."""

    def test_select_split_on_commas(self):
        assert QuerySpec(select="displayName,mail").select == ["displayName", "mail"]

    def test_select_drops_empty_entries(self):
        assert QuerySpec(select="displayName,,mail").select == ["displayName", "mail"]

    def test_select_trims_names(self):
        assert QuerySpec(select=" displayName , mail ").select == ["displayName", "mail"]

    @pytest.mark.parametrize("select", [None, "", "   ", ",,", " , "])
    def test_blank_select_is_none(self, select):
        assert QuerySpec(select=select).select is None
        assert split_select(select) is None


class TestQuerySpecParams:
    """Query parameter and header tests."""

    def test_minimal_params(self):
        spec = QuerySpec()
        assert spec.to_params() == {"$top": 10}
        assert spec.headers == {}

    def test_search_is_quoted_with_consistency_header(self):
        spec = QuerySpec(search="John Smith")
        params = spec.to_params()

        assert params["$search"] == '"John Smith"'
        assert spec.headers == {"ConsistencyLevel": "eventual"}

    def test_filter_passed_through_unchanged(self):
        spec = QuerySpec(filter="startswith(displayName,'John')")
        assert spec.to_params()["$filter"] == "startswith(displayName,'John')"
        assert spec.headers == {}

    def test_blank_filter_and_search_are_ignored(self):
        spec = QuerySpec(filter="  ", search="")
        assert spec.to_params() == {"$top": 10}
        assert spec.headers == {}

    def test_filter_and_search_combined(self):
        spec = QuerySpec(filter="department eq 'Sales'", search="John", top=5)
        assert spec.to_params() == {
            "$top": 5,
            "$filter": "department eq 'Sales'",
            "$search": '"John"',
        }

    def test_select_joined_in_params(self):
        spec = QuerySpec(select="displayName,,mail")
        assert spec.to_params()["$select"] == "displayName,mail"


class TestUserModels:
    """Graph record mapping tests."""

    def test_summary_uses_graph_field_names(self):
        payload = UserSummary.model_validate(
            {"id": "1", "displayName": "Ada", "businessPhones": ["123"], "extra": "x"}
        ).to_payload()

        assert payload["displayName"] == "Ada"
        assert payload["businessPhones"] == ["123"]
        assert payload["mail"] is None
        assert "extra" not in payload
        assert set(payload) == {
            "id",
            "displayName",
            "mail",
            "userPrincipalName",
            "department",
            "jobTitle",
            "officeLocation",
            "mobilePhone",
            "businessPhones",
            "accountEnabled",
        }

    def test_detail_reads_nested_sign_in_activity(self):
        detail = UserDetail.from_graph(
            {
                "id": "1",
                "city": "Rome",
                "signInActivity": {"lastSignInDateTime": "2024-05-01T12:00:00Z"},
            }
        )
        payload = detail.to_payload()

        assert payload["lastSignInDateTime"] == "2024-05-01T12:00:00Z"
        assert payload["city"] == "Rome"
        assert "signInActivity" not in payload

    def test_detail_without_sign_in_activity_omits_field(self):
        payload = UserDetail.from_graph({"id": "1", "companyName": "Contoso"}).to_payload()

        assert "lastSignInDateTime" not in payload
        assert payload["companyName"] == "Contoso"
        assert payload["createdDateTime"] is None
