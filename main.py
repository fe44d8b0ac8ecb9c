import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from moneycoreapi import (
    ApiMethod,
    ApiSession,
    CoreApiError,
    DictHostProvider,
    HTTPMethod,
    ParametersEncoder,
    URLInfo,
)
from moneycoreapi.config import float_policy, load_config
from moneycoreapi.errors import ConfigError
from moneycoreapi.values import NonFiniteFloats


class CommandLineMethod(ApiMethod):
    """An API method built from command line arguments."""

    url: Optional[str] = None
    params: Any = None
    floats = NonFiniteFloats()

    def parameters_encoding(self) -> ParametersEncoder:
        return ParametersEncoder(self.floats)

    def url_info(self, host_provider) -> URLInfo:
        if self.url is not None:
            return URLInfo.from_url(self.url)
        return super().url_info(host_provider)

    def to_params(self) -> Any:
        return self.params


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse cmdline arguments"""
    parser = argparse.ArgumentParser(
        description="Show how API parameters are encoded into a request",
        usage="%(prog)s [options]",
    )

    parser.add_argument("--configfile", help="JSON config file", required=True)

    parser.add_argument(
        "--method", help="HTTP method (default: GET)", default="GET"
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--url", help="complete request URL")
    target.add_argument("--host-key", help="host key from the config file")

    parser.add_argument("--path", help="path after the host", default="")

    parser.add_argument(
        "--params",
        help="JSON file with the parameters, - for stdin (default: none)",
    )

    return parser.parse_args(argv)


def read_params(path: Optional[str]) -> Any:
    if path is None:
        return {}
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as err:
        raise ConfigError(f"cannot read parameters from {path}: {err}") from err


def show_request(args: argparse.Namespace, cfg: Dict[str, Any]) -> None:
    http_method = HTTPMethod.parse(args.method)
    if http_method is None:
        raise ConfigError(f'unknown HTTP method "{args.method}"')

    method = CommandLineMethod(
        host_provider_key=args.host_key or "",
        http_method=http_method,
        path=args.path,
        url=args.url,
        params=read_params(args.params),
        floats=float_policy(cfg),
    )
    session = ApiSession(DictHostProvider(cfg["hosts"]))
    try:
        request = session.make_request(method)
    finally:
        session.close()

    print(f"{request.method} {request.url}")
    for name, val in request.headers.items():
        print(f"{name}: {val}")
    if request.body:
        print()
        body = request.body
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        print(body)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format=(
            "%(asctime)s %(name)s:%(levelname)-5s "
            "[%(funcName)s:%(lineno)4d] %(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("moneycoreapi")

    try:
        cfg = load_config(args.configfile)
        logging.getLogger().setLevel(cfg["loglevel"])
        show_request(args, cfg)
    except CoreApiError as err:
        logger.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
