"""
Descriptions of API methods: HTTP method, where the URL comes from, and
which parameters are sent.
"""

from typing import Any, Dict, Optional

from .encode import ParametersEncoder, ParametersEncoding
from .errors import SubclassError, UnknownHostKeyError
from .method import HTTPMethod


class URLInfo:
    """
    Either a complete URL, or a host and a path to join.
    """

    url: Optional[str] = None
    host = ""
    path = ""

    def __init__(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)

    @classmethod
    def from_url(cls, url: str) -> "URLInfo":
        return URLInfo(url=url)

    @classmethod
    def from_components(cls, host: str, path: str) -> "URLInfo":
        return URLInfo(host=host, path=path)

    def resolve(self) -> str:
        """
        Return the absolute URL. Hosts without a scheme use https.
        """
        if self.url is not None:
            return self.url
        host = self.host
        if host.startswith("//"):
            host = "https:" + host
        return host + self.path

    def __repr__(self) -> str:
        if self.url is not None:
            return f"URLInfo(url={self.url!r})"
        return f"URLInfo(host={self.host!r}, path={self.path!r})"


class HostProvider:
    def host(self, key: str) -> str:
        raise SubclassError()


class DictHostProvider(HostProvider):
    def __init__(self, hosts: Dict[str, str]):
        self.hosts = hosts

    def host(self, key: str) -> str:
        if key not in self.hosts:
            raise UnknownHostKeyError(key)
        return self.hosts[key]


class ApiMethod:
    """
    One API call.

    Subclasses set ``host_provider_key`` and usually ``path`` and
    ``http_method``, either as class attributes or per call through the
    constructor. The other public instance attributes are the parameters.
    """

    host_provider_key = ""
    http_method = HTTPMethod.POST
    path = ""

    def __init__(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)

    def parameters_encoding(self) -> ParametersEncoding:
        return ParametersEncoder()

    def url_info(self, host_provider: HostProvider) -> URLInfo:
        host = host_provider.host(self.host_provider_key)
        return URLInfo.from_components(host, self.path)

    def to_params(self) -> Dict[str, Any]:
        return {
            key: val
            for key, val in vars(self).items()
            if not key.startswith("_") and not hasattr(type(self), key)
        }
