"""
URL-encoded parameters for API requests.

Parameters are placed in the URL query for GET, HEAD and DELETE requests,
and in an ``application/x-www-form-urlencoded`` body for everything else.
"""

import decimal
import logging
import urllib.parse
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from requests.structures import CaseInsensitiveDict

from .errors import MissingURLError, SubclassError
from .method import HTTPMethod
from .values import (
    STRICT,
    Arr,
    Bool,
    NonFiniteFloats,
    Null,
    Num,
    Obj,
    Param,
    Str,
    to_param,
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

# RFC 3986 section 3.4: "?" and "/" may appear unescaped in a query, which
# keeps URLs passed as values readable. Every other reserved character
# (":#[]@" and "!$&'()*+,;=") is escaped. quote() never escapes "-._~".
SAFE_CHARS = "?/"

# Code points escaped per call to quote().
BATCH_SIZE = 50

URL_METHODS = (HTTPMethod.GET, HTTPMethod.HEAD, HTTPMethod.DELETE)

QueryComponent = Tuple[str, str]

logger = logging.getLogger("ParametersEncoder")


def escape(string: str) -> str:
    """
    Percent-escape a query string key or value.

    The string is escaped in batches of BATCH_SIZE code points. A batch
    that cannot be UTF-8 encoded (lone surrogates) is kept as is.
    """
    escaped = []
    for start in range(0, len(string), BATCH_SIZE):
        batch = string[start : start + BATCH_SIZE]
        try:
            escaped.append(urllib.parse.quote(batch, safe=SAFE_CHARS))
        except UnicodeEncodeError as err:
            logger.warning(
                "Cannot escape %r (%s), passing it through unescaped",
                batch,
                err.reason,
            )
            escaped.append(batch)
    return "".join(escaped)


def number_string(val: Union[int, float]) -> str:
    """
    Plain decimal notation: no exponent, no ".0" on integral floats.
    """
    if isinstance(val, float):
        if val.is_integer():
            return str(int(val))
        return format(decimal.Decimal(repr(val)), "f")
    return str(val)


def query_components(key: str, val: Param) -> List[QueryComponent]:
    """
    Flatten one key and its value into escaped (key, value) pairs.

    Nested objects give ``key[nested]`` keys, array elements give repeated
    ``key[]`` keys. A nested None is sent as ``key=`` with an empty value,
    it is not dropped.
    """
    components: List[QueryComponent] = []
    if isinstance(val, Obj):
        for nested_key, nested_val in val.items.items():
            components += query_components(f"{key}[{nested_key}]", nested_val)
    elif isinstance(val, Arr):
        for nested_val in val.items:
            components += query_components(f"{key}[]", nested_val)
    elif isinstance(val, Bool):
        components.append((escape(key), "true" if val.value else "false"))
    elif isinstance(val, Num):
        components.append((escape(key), escape(number_string(val.value))))
    elif isinstance(val, Str):
        components.append((escape(key), escape(val.value)))
    elif isinstance(val, Null):
        components.append((escape(key), ""))
    else:
        raise TypeError(f"Not a parameter: key={key} val={val!r}")
    return components


def query(parameters: Dict[str, Any]) -> str:
    """
    Build a query string, with top-level keys in sorted order.

    Keys whose value is missing (None or Null) are left out.
    """
    components: List[QueryComponent] = []
    for key in sorted(parameters):
        val = parameters[key]
        if val is None or isinstance(val, Null):
            continue
        components += query_components(key, to_param(val))
    return "&".join(f"{k}={v}" for k, v in components)


def encodes_parameters_in_url(method: Optional[str]) -> bool:
    """
    Whether parameters go in the URL query (or else in the body).

    A missing method means GET. Unknown methods use the body.
    """
    http_method = HTTPMethod.parse(method or "GET")
    return http_method in URL_METHODS


def append_query(url: str, encoded_query: str) -> str:
    parts = urllib.parse.urlsplit(url)
    if parts.query:
        encoded_query = parts.query + "&" + encoded_query
    return urllib.parse.urlunsplit(parts._replace(query=encoded_query))


class ParametersEncoding:
    """
    Puts the parameters of an API method into a request.
    """

    def encode(self, val: Any) -> None:
        raise SubclassError()

    def pass_parameters(self, request: requests.Request) -> None:
        raise SubclassError()


class ParametersEncoder(ParametersEncoding):
    """
    Creates a URL-encoded query string, which is either appended to the
    query of the request URL or set as the request body, depending on the
    HTTP method.

    An encoder holds the parameters of a single request. Make a new one
    for every request; instances are not safe to share between threads.
    """

    def __init__(self, floats: NonFiniteFloats = STRICT):
        self.floats = floats
        self.parameters: Dict[str, Param] = {}

    def encode(self, val: Any) -> None:
        """
        Convert and store the parameters to pass.

        :raises: `StructuralEncodingError` if the value cannot be converted,
                 e.g. it holds a non-finite float and floats are strict.
        """
        tree = to_param(val, self.floats)
        if isinstance(tree, Obj):
            self.parameters = dict(tree.items)
        else:
            logger.debug(
                "Top-level %s is not an object, no parameters to pass",
                type(tree).__name__,
            )
            self.parameters = {}

    def pass_parameters(self, request: requests.Request) -> None:
        """
        Apply the stored parameters to a request.

        :raises: `MissingURLError` if parameters go in the URL but the
                 request has none.
        """
        if encodes_parameters_in_url(request.method):
            if not request.url:
                raise MissingURLError()
            if not self.parameters:
                return
            encoded_query = query(self.parameters)
            request.url = append_query(request.url, encoded_query)
            logger.debug("Parameters in URL: %s", request.url)
            return

        encoded_query = query(self.parameters)
        headers = CaseInsensitiveDict(request.headers or {})
        if "Content-Type" not in headers:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        request.headers = headers
        try:
            request.data = encoded_query.encode("utf-8")
        except UnicodeEncodeError:
            # Unescaped lone surrogates; no lossy replacement.
            logger.warning("Cannot encode request body as UTF-8, no body set")
            request.data = None
        logger.debug("Parameters in body: %s", encoded_query)
