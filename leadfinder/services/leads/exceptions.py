"""Custom exceptions for the lead finder pipeline."""


class LeadFinderError(Exception):
    """Base exception for all lead finder errors.

    ``status_code`` is the HTTP status the API reports for the error.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(LeadFinderError):
    """Raised when a required request parameter is missing or empty."""

    status_code = 400


class ConfigurationError(LeadFinderError):
    """Raised when search API credentials are not configured."""

    status_code = 500


class UpstreamSearchError(LeadFinderError):
    """Raised when the search API fails, times out or returns garbage."""

    status_code = 500


class EnrichmentError(LeadFinderError):
    """Raised when a single contact page cannot be fetched.

    Always contained by the crawler, never reaches the caller.
    """
