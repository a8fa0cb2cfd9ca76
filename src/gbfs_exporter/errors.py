from __future__ import annotations


class ExporterError(Exception):
    """Base class for failures that end a probe or a poll iteration.

    ``status_code`` is the HTTP status a probe answers with, ``reason`` is the
    label recorded by the exporter's own counters.
    """

    status_code = 500
    reason = "error"


class ConfigError(ExporterError):
    status_code = 400
    reason = "config_error"


class NetworkError(ExporterError):
    status_code = 400
    reason = "network_error"

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"HTTP error: {cause}")


class BodyReadError(ExporterError):
    status_code = 500
    reason = "body_read_error"

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to read HTTP body of target '{url}': {cause}")


class SchemaError(ExporterError):
    status_code = 400
    reason = "schema_error"

    def __init__(self, url: str, cause: BaseException | str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(
            "Could not unmarshal target JSON, "
            f"target '{url}' does not have the expected schema: {cause}"
        )
