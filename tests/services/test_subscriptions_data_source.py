"""
Tests for the azurerm_subscriptions data source.

Covers flattening of SDK subscriptions, display-name matching, enumeration
order and the two listing failure modes.
"""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from azure.core.exceptions import (
    DeserializationError,
    HttpResponseError,
    ServiceRequestError,
)

from tf_azurerm.clients import ProviderClient
from tf_azurerm.exceptions import ListError
from tf_azurerm.services.subscription import (
    MatchCriteria,
    SubscriptionsDataSource,
    flatten_subscription,
)
from tf_azurerm.timeout_config import Deadline, OperationTimeoutError


class TestFlattenSubscription:
    """Test cases for flatten_subscription."""

    def test_flattens_all_fields(self, make_subscription, policies) -> None:
        sub = make_subscription("Production", policies=policies)

        record = flatten_subscription(sub)

        assert record.to_state() == {
            "id": "/subscriptions/00000000-0000-0000-0000-000000000001",
            "subscription_id": "00000000-0000-0000-0000-000000000001",
            "tenant_id": "tenant-123",
            "display_name": "Production",
            "state": "Enabled",
            "location_placement_id": "Public_2014-09-01",
            "quota_id": "PayAsYouGo_2014-09-01",
            "spending_limit": "Off",
        }

    def test_absent_fields_are_omitted(self, make_subscription) -> None:
        sub = make_subscription(None, tenant_id=None, state=None)

        state = flatten_subscription(sub).to_state()

        assert "display_name" not in state
        assert "tenant_id" not in state
        assert "location_placement_id" not in state
        assert "spending_limit" not in state
        assert state["state"] == ""

    def test_policies_without_spending_limit(self, make_subscription) -> None:
        policies = SimpleNamespace(
            location_placement_id=None, quota_id="Internal_2014-09-01", spending_limit=None
        )
        state = flatten_subscription(make_subscription("x", policies=policies)).to_state()

        assert state["quota_id"] == "Internal_2014-09-01"
        assert state["spending_limit"] == ""
        assert "location_placement_id" not in state

    def test_plain_string_state(self, make_subscription) -> None:
        record = flatten_subscription(make_subscription("x", state="Warned"))
        assert record.state == "Warned"


class TestMatchCriteria:
    """Test cases for MatchCriteria."""

    def test_no_criteria_matches_everything(self) -> None:
        criteria = MatchCriteria()
        assert criteria.mode == "all"
        assert criteria.matches("anything")
        assert criteria.matches(None)

    def test_exact_match_is_case_sensitive(self) -> None:
        criteria = MatchCriteria(exact_match="Prod")
        assert criteria.matches("Prod")
        assert not criteria.matches("prod")
        assert not criteria.matches("Prod-1")

    def test_exact_match_overrides_prefix_and_contains(self) -> None:
        criteria = MatchCriteria(
            exact_match="Prod", display_name_prefix="zzz", display_name_contains="qqq"
        )
        assert criteria.mode == "exact"
        assert criteria.matches("Prod")

    def test_prefix_is_case_insensitive(self) -> None:
        criteria = MatchCriteria(display_name_prefix="DEV")
        assert criteria.matches("dev-1")
        assert criteria.matches("Dev-2")
        assert not criteria.matches("my-dev")

    def test_contains_is_case_insensitive(self) -> None:
        criteria = MatchCriteria(display_name_contains="Shared")
        assert criteria.matches("corp-SHARED-services")
        assert not criteria.matches("corp-services")

    def test_prefix_and_contains_both_apply(self) -> None:
        criteria = MatchCriteria(display_name_prefix="dev", display_name_contains="eu")
        assert criteria.matches("Dev-EU-1")
        assert not criteria.matches("Dev-US-1")
        assert not criteria.matches("Prod-EU-1")

    def test_none_values_become_empty(self) -> None:
        criteria = MatchCriteria(display_name_prefix=None, exact_match=None)
        assert criteria.display_name_prefix == ""
        assert criteria.exact_match == ""

    def test_missing_display_name_never_matches_filters(self) -> None:
        assert not MatchCriteria(display_name_prefix="a").matches(None)
        assert not MatchCriteria(exact_match="a").matches(None)

    def test_describe(self) -> None:
        assert MatchCriteria().describe() == "all subscriptions"
        assert "starts with 'dev'" in MatchCriteria(display_name_prefix="dev").describe()


class TestSubscriptionsDataSource:
    """Test cases for SubscriptionsDataSource."""

    @pytest.fixture
    def data_source(self, provider_client: ProviderClient) -> SubscriptionsDataSource:
        return SubscriptionsDataSource(provider_client)

    def test_prefix_filters_records(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("Dev-1"), make_subscription("Staging")]
        )

        result = data_source.list_matching(MatchCriteria(display_name_prefix="dev"))

        assert [r.display_name for r in result] == ["Dev-1"]

    def test_exact_match_ignores_other_settings(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("Prod"), make_subscription("prod"), make_subscription("Prod-2")]
        )

        result = data_source.list_matching(
            MatchCriteria(exact_match="Prod", display_name_prefix="prod", display_name_contains="2")
        )

        assert [r.display_name for r in result] == ["Prod"]

    def test_preserves_source_order_without_dedup(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        names = ["b", "a", "c", "a"]
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription(n) for n in names]
        )

        result = data_source.list_matching()

        assert [r.display_name for r in result] == names

    def test_empty_listing_is_not_an_error(
        self, data_source, mock_subscription_client: Mock, paged
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged([])

        assert data_source.list_matching(MatchCriteria(exact_match="x")) == []

    def test_tags_attached_to_matches(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("Dev", tags={"env": "dev", "owner": None})]
        )

        result = data_source.list_matching()

        assert result[0].tags == {"env": "dev"}
        assert result[0].to_state()["tags"] == {"env": "dev"}

    def test_initial_fetch_failure_raises_list_error(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        error = HttpResponseError(message="AuthorizationFailed")
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("a")], fail_at=0, error=error
        )

        with pytest.raises(ListError) as exc_info:
            data_source.list_matching()

        assert exc_info.value.message.startswith("Error listing subscriptions: ")
        assert "AuthorizationFailed" in exc_info.value.message
        assert exc_info.value.cause is error
        assert exc_info.value.context["tenant_id"] == "tenant-123"

    def test_advance_failure_raises_without_partial_results(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        error = ServiceRequestError("connection reset")
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("Dev-1"), make_subscription("Dev-2"), make_subscription("Dev-3")],
            fail_at=2,
            error=error,
        )

        with pytest.raises(ListError) as exc_info:
            data_source.list_matching(MatchCriteria(display_name_prefix="dev"))

        assert exc_info.value.message.startswith(
            "Error going to next subscriptions value: "
        )
        assert exc_info.value.cause is error

    def test_malformed_page_raises_list_error(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        error = DeserializationError("bad page")
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("a"), make_subscription("b")], fail_at=1, error=error
        )

        with pytest.raises(ListError) as exc_info:
            data_source.list_matching()

        assert exc_info.value.message == "Error going to next subscriptions value: bad page"
        assert exc_info.value.cause is error

    def test_malformed_first_page_raises_list_error(
        self, data_source, mock_subscription_client: Mock, paged
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged(
            [None], fail_at=0, error=DeserializationError("bad page")
        )

        with pytest.raises(ListError, match="Error listing subscriptions: bad page"):
            data_source.list_matching()

    def test_expired_deadline_surfaces_as_list_error(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged
    ) -> None:
        ticks = iter([0.0, 0.5, 5.0, 5.0])
        deadline = Deadline(1, operation="read", clock=lambda: next(ticks))
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("a"), make_subscription("b")]
        )

        with pytest.raises(ListError) as exc_info:
            data_source.list_matching(deadline=deadline)

        assert isinstance(exc_info.value.cause, OperationTimeoutError)
        assert "Error going to next subscriptions value" in exc_info.value.message

    def test_creates_client_for_environment(
        self, provider_config, make_subscription, paged
    ) -> None:
        factory = Mock()
        factory.return_value.subscriptions.list.return_value = paged([])
        credential = Mock()
        client = ProviderClient(
            provider_config, credential=credential, subscription_client_factory=factory
        )

        SubscriptionsDataSource(client).list_matching()

        args, kwargs = factory.call_args
        assert args == (credential,)
        assert kwargs["base_url"] == "https://management.azure.com/"
        assert kwargs["credential_scopes"] == ["https://management.azure.com/.default"]

    def test_read_sets_id_and_state(
        self, data_source, mock_subscription_client: Mock, make_subscription, paged, policies
    ) -> None:
        mock_subscription_client.subscriptions.list.return_value = paged(
            [make_subscription("Dev-1", policies=policies), make_subscription("Staging")]
        )

        state = data_source.read(MatchCriteria(display_name_contains="DEV"))

        assert state["id"] == "subscriptions-tenant-123"
        assert state["display_name_contains"] == "DEV"
        assert state["display_name_prefix"] == ""
        assert state["exact_match"] == ""
        assert len(state["subscriptions"]) == 1
        assert state["subscriptions"][0]["display_name"] == "Dev-1"
        assert state["subscriptions"][0]["spending_limit"] == "Off"
        assert state["subscriptions"][0]["tags"] == {}
