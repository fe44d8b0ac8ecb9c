"""A class to turn API method descriptions into ready-to-send requests."""

import logging
from typing import Optional

import requests

from . import version
from .api import ApiMethod, HostProvider


class ApiSession:
    """Builds requests for API methods against the hosts of a host provider.

    The :py:attr:`session` attribute is a :py:class:`requests.Session`
    object. Its headers (User-Agent included) are merged into every request
    built here. Customise networking options by manipulating it.

    .. note::
       Requests are prepared, never sent.

    """

    def __init__(
        self,
        host_provider: HostProvider,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.host_provider = host_provider
        if session is None:
            session = requests.Session()
        self.session = session
        self.user_agent = "moneycoreapi/" + version.__version__
        self.session.headers.update({"User-Agent": self.user_agent})
        if logger is not None:
            self.logger = logger
        else:
            self.logger = logging.getLogger("ApiSession")

    def close(self) -> None:
        """Close the underlying :py:class:`requests.Session`."""
        self.session.close()

    def make_request(self, api_method: ApiMethod) -> requests.PreparedRequest:
        """Build the request for an API method.

        :param api_method: the method to call; its parameters are encoded
                           with ``api_method.parameters_encoding()``
        :returns: the prepared request
        :raises: `HostProviderError`: if the host key is unknown
        :raises: `EncodingError`: if the parameters cannot be encoded
        :raises: `MissingURLError`: if parameters go in the URL and the
                 resolved URL is empty

        """
        url_info = api_method.url_info(self.host_provider)
        url = url_info.resolve()
        self.logger.debug(
            "Request (%s): %s %s",
            type(api_method).__name__,
            api_method.http_method.value,
            url,
        )

        request = requests.Request(api_method.http_method.value, url)
        encoder = api_method.parameters_encoding()
        encoder.encode(api_method)
        encoder.pass_parameters(request)
        return self.session.prepare_request(request)
