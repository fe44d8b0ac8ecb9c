class CoreApiError(Exception):
    pass


class EncodingError(CoreApiError):
    def __init__(self, message: str):
        super().__init__(f"Encoding error: {message}")


class StructuralEncodingError(EncodingError):
    def __init__(self, message: str):
        super().__init__(f"cannot convert value to parameters: {message}")


class MissingURLError(CoreApiError):
    def __init__(self):
        super().__init__("Cannot encode parameters in URL: request has no URL")


class HostProviderError(CoreApiError):
    pass


class UnknownHostKeyError(HostProviderError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown host provider key: {key}")


class ConfigError(CoreApiError):
    def __init__(self, message: str):
        super().__init__(f"Config error: {message}")


class SubclassError(Exception):
    def __init__(self):
        super().__init__("to be implemented in a subclass")
