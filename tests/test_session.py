"""
Test building requests for API methods
"""

import pytest
import requests

from moneycoreapi import version
from moneycoreapi.api import ApiMethod, DictHostProvider, URLInfo
from moneycoreapi.encode import FORM_CONTENT_TYPE
from moneycoreapi.errors import (
    MissingURLError,
    StructuralEncodingError,
    UnknownHostKeyError,
)
from moneycoreapi.method import HTTPMethod
from moneycoreapi.session import ApiSession

HOSTS = DictHostProvider({"money": "//ya.ru"})


class AccountInfo(ApiMethod):
    host_provider_key = "money"
    http_method = HTTPMethod.GET
    path = "/api/account-info"


class RequestPayment(ApiMethod):
    host_provider_key = "money"
    path = "/api/request-payment"


class NoUrl(AccountInfo):
    def url_info(self, host_provider) -> URLInfo:
        return URLInfo.from_url("")


def test_get_request() -> None:
    session = ApiSession(HOSTS)
    request = session.make_request(AccountInfo(p="a b", extended=True))
    assert request.method == "GET"
    assert request.url == (
        "https://ya.ru/api/account-info?extended=true&p=a%20b"
    )
    assert request.body is None
    assert request.headers["User-Agent"] == (
        "moneycoreapi/" + version.__version__
    )


def test_post_request() -> None:
    session = ApiSession(HOSTS)
    method = RequestPayment(pattern_id="p2p", amount=10.5, to="4100 1")
    request = session.make_request(method)
    assert request.method == "POST"
    assert request.url == "https://ya.ru/api/request-payment"
    assert request.body == b"amount=10.5&pattern_id=p2p&to=4100%201"
    assert request.headers["Content-Type"] == FORM_CONTENT_TYPE


def test_settings_are_not_parameters() -> None:
    session = ApiSession(HOSTS)
    method = RequestPayment(http_method=HTTPMethod.GET, path="/api", p=1)
    request = session.make_request(method)
    assert request.method == "GET"
    assert request.url == "https://ya.ru/api?p=1"


def test_custom_session() -> None:
    custom = requests.Session()
    custom.headers["Authorization"] = "Bearer token"
    session = ApiSession(HOSTS, session=custom)
    request = session.make_request(RequestPayment())
    assert request.headers["Authorization"] == "Bearer token"
    assert not request.body


def test_errors() -> None:
    session = ApiSession(DictHostProvider({}))
    with pytest.raises(UnknownHostKeyError):
        session.make_request(AccountInfo())

    session = ApiSession(HOSTS)
    with pytest.raises(StructuralEncodingError):
        session.make_request(AccountInfo(amount=float("inf")))
    with pytest.raises(MissingURLError):
        session.make_request(NoUrl(p=1))
