from .api import ApiMethod, DictHostProvider, HostProvider, URLInfo
from .encode import ParametersEncoder, ParametersEncoding, escape, query
from .errors import (
    CoreApiError,
    EncodingError,
    MissingURLError,
    StructuralEncodingError,
    UnknownHostKeyError,
)
from .method import HTTPMethod
from .session import ApiSession
from .values import NonFiniteFloats
