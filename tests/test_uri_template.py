from uuid import UUID

import pytest
from harvest_sdk.errors import ConfigurationError
from harvest_sdk.uri_template import expand, parse_expressions, query_keys

BASE = "https://api.harvestapp.com/v2"


def test_reserved_expansion_keeps_scheme_and_slashes():
    url = expand("{+baseurl}/clients/{+clientid}", {"baseurl": BASE, "clientid": 42})
    assert url == "https://api.harvestapp.com/v2/clients/42"


def test_simple_expansion_percent_encodes_reserved_characters():
    url = expand("{+baseurl}/clients/{clientid}", {"baseurl": BASE, "clientid": "a/b c?"})
    assert url == "https://api.harvestapp.com/v2/clients/a%2Fb%20c%3F"


def test_reserved_expansion_does_not_encode_reserved_characters():
    url = expand("{+baseurl}/clients/{+clientid}", {"baseurl": BASE, "clientid": "a/b c?"})
    assert url == "https://api.harvestapp.com/v2/clients/a/b%20c?"


def test_reserved_expansion_keeps_existing_percent_triplets():
    url = expand("{+baseurl}/x", {"baseurl": "https://host/a%20b"})
    assert url == "https://host/a%20b/x"


def test_case_is_preserved():
    url = expand("{+baseurl}/users/{id}", {"baseurl": BASE, "id": "AbC"})
    assert url.endswith("/users/AbC")


def test_uuid_path_value():
    value = UUID("12345678-1234-5678-1234-567812345678")
    url = expand("{+baseurl}/x/{id}", {"baseurl": BASE, "id": value})
    assert url.endswith("/x/12345678-1234-5678-1234-567812345678")


def test_query_expansion_emits_present_values_in_template_order():
    url = expand(
        "{+baseurl}/roles{?page,per_page}",
        {"baseurl": BASE},
        {"per_page": "100", "page": "2"},
    )
    assert url == "https://api.harvestapp.com/v2/roles?page=2&per_page=100"


def test_query_expansion_skips_none_and_missing_values():
    url = expand(
        "{+baseurl}/expenses{?user_id,client_id,page}",
        {"baseurl": BASE},
        {"user_id": "1", "client_id": None},
    )
    assert url == "https://api.harvestapp.com/v2/expenses?user_id=1"
    assert "client_id" not in url
    assert "page" not in url


def test_query_expansion_with_nothing_set_leaves_no_trace():
    url = expand("{+baseurl}/roles{?page,per_page}", {"baseurl": BASE})
    assert url == "https://api.harvestapp.com/v2/roles"


def test_query_values_are_fully_encoded():
    url = expand(
        "{+baseurl}/expenses{?updated_since}",
        {"baseurl": BASE},
        {"updated_since": "2023-04-09T00:00:00+02:00"},
    )
    assert url.endswith("?updated_since=2023-04-09T00%3A00%3A00%2B02%3A00")


def test_query_keys_not_in_template_are_ignored():
    url = expand("{+baseurl}/roles{?page}", {"baseurl": BASE}, {"page": "1", "bogus": "x"})
    assert url == "https://api.harvestapp.com/v2/roles?page=1"


def test_missing_path_parameter_raises():
    with pytest.raises(ConfigurationError) as exc:
        expand("{+baseurl}/clients/{+clientid}", {"baseurl": BASE})
    assert "clientid" in str(exc.value)


@pytest.mark.parametrize("value", [None, True, 1.5, {"a": 1}, ["a"]])
def test_wrong_kind_of_path_parameter_raises(value):
    with pytest.raises(ConfigurationError):
        expand("{+baseurl}/clients/{+clientid}", {"baseurl": BASE, "clientid": value})


def test_unbalanced_braces_raise():
    with pytest.raises(ConfigurationError):
        expand("{+baseurl/clients", {"baseurl": BASE})


def test_unsupported_operator_raises():
    with pytest.raises(ConfigurationError):
        parse_expressions("{+baseurl}/clients{#frag}")


def test_query_keys_lists_declared_names():
    assert query_keys("{+baseurl}/reports/time/tasks{?from,to,page,per_page}") == [
        "from",
        "to",
        "page",
        "per_page",
    ]
