import enum
from typing import Optional


class HTTPMethod(str, enum.Enum):
    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, name: str) -> Optional["HTTPMethod"]:
        try:
            return cls(name.upper())
        except ValueError:
            return None
