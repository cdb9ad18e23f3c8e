"""
Error taxonomy for the comparison pipeline.

Every failure surfaces to the caller as a single human-readable message:
- ValidationError: bad or incomplete caller input (HTTP 400)
- FetchConnectionError: portal unreachable, no response received
- HttpStatusError: portal answered with a non-2xx status
- ParseError: data table missing or without numeric rows
- YearDataError: any of the above, tagged with the fiscal year it belongs to
"""

from typing import Optional


class ComparatorError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ComparatorError):
    """Caller input is missing or malformed."""


class FetchConnectionError(ComparatorError):
    """No response was received from the remote portal."""

    def __init__(self, url: str, message: Optional[str] = None):
        super().__init__(
            message or "Error de red: No se pudo conectar a la URL proporcionada."
        )
        self.url = url


class HttpStatusError(ComparatorError):
    """Remote portal responded with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Error al acceder a la URL: El servidor respondió con estado {status_code}."
        )
        self.url = url
        self.status_code = status_code


class ParseError(ComparatorError):
    """The page does not contain a usable data table."""


class YearDataError(ComparatorError):
    """A single-year pipeline failed; carries the year for context."""

    def __init__(self, year: int, message: str):
        super().__init__(f"Error en datos de {year}: {message}")
        self.year = year
