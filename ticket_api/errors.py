"""Errors raised while talking to PayPal or validating caller input."""


class TicketApiError(Exception):
    """Base class for every error this service raises on purpose."""


class CredentialError(TicketApiError):
    """PayPal client id or secret is not configured."""


class UpstreamError(TicketApiError):
    """PayPal could not be reached or answered with something unusable."""


class UpstreamAuthError(UpstreamError):
    """The client-credentials exchange did not yield an access token."""


class UpstreamResponseError(UpstreamError):
    """A PayPal response body could not be parsed as JSON."""

    def __init__(self, text, status_code=None):
        super().__init__(text)
        self.text = text
        self.status_code = status_code


class InvalidRequestError(TicketApiError):
    """Caller input is malformed; reported as a 4xx."""

    status_code = 400


class InvalidCartError(InvalidRequestError):
    pass


class InvalidOrderIdError(InvalidRequestError):
    pass
