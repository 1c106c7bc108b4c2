"""
SimcData - Errors
Exception types raised by the decoder, the data provider and the builders.

Lookups that miss are not errors: they return None and log a warning.
"""


class SimcDataError(Exception):
    """Base class for everything this package raises on purpose."""


class UnsupportedFileType(SimcDataError):
    def __init__(self, file_type):
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type}")


class MalformedRow(SimcDataError):
    """A dump row passed its shape check but a field failed to parse."""

    def __init__(self, line: str, entity: str, reason: str = ""):
        self.line = line
        self.entity = entity
        self.reason = reason
        msg = f"Malformed {entity} row: {line.strip()[:120]}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class UnsupportedFeature(SimcDataError):
    """Data that the scaling formulas know about but do not implement."""

    def __init__(self, feature: str):
        self.feature = feature
        super().__init__(f"Unsupported feature: {feature}")


class DataFetchError(SimcDataError):
    """A raw dump could not be downloaded and there is no local copy."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}" if reason else f"Failed to fetch {url}")
