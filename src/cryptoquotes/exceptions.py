"""Error hierarchy shared by use cases and the HTTP layer.

Every error carries a machine-readable ``code`` (the ``error`` field of the JSON
response) and the HTTP status it maps to at the API boundary.
"""


class CryptoQuotesError(Exception):
    code = "internal_error"
    status_code = 503

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


# 400


class ValidationError(CryptoQuotesError):
    code = "bad_request"
    status_code = 400


class BadRequestError(ValidationError):
    code = "bad_request"


class InvalidFiltersError(ValidationError):
    code = "invalid_filters"


class InvalidQueryParamError(ValidationError):
    """A query parameter that failed to parse; ``code`` names the parameter."""

    def __init__(self, param: str) -> None:
        self.code = f"invalid_{param}"
        super().__init__(self.code)


class InvalidEmailError(ValidationError):
    code = "invalid_email"


class InvalidPasswordError(ValidationError):
    code = "invalid_password"


class InvalidNameError(ValidationError):
    code = "invalid_name"


class InvalidCoinInputError(ValidationError):
    code = "invalid_coin_input"


class InvalidCoinUpdateError(ValidationError):
    code = "invalid_coin_update"


class CoinNotResolvableError(ValidationError):
    code = "coin_not_resolvable"


class ProviderNotSupportedError(ValidationError):
    code = "provider_not_supported"


# 404


class NotFoundError(CryptoQuotesError):
    code = "not_found"
    status_code = 404


class CoinNotEnabledError(NotFoundError):
    code = "coin_not_enabled"


class CoinNotFoundError(NotFoundError):
    code = "coin_not_found"


class QuoteNotFoundError(NotFoundError):
    code = "quote_not_found"


# 409


class EmailAlreadyRegisteredError(CryptoQuotesError):
    code = "email_already_registered"
    status_code = 409


# 401


class AuthError(CryptoQuotesError):
    code = "unauthorized"
    status_code = 401


class InvalidCredentialsError(AuthError):
    code = "invalid_credentials"


class MissingTokenError(AuthError):
    code = "missing_token"


class InvalidTokenError(AuthError):
    code = "invalid_token"


# 429


class CooldownActiveError(CryptoQuotesError):
    """Manual refresh requested before the cooldown window elapsed."""

    code = "cooldown_active"
    status_code = 429

    def __init__(self, retry_after_seconds: int) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"cooldown active, retry after {retry_after_seconds}s")


# 503


class ExternalServiceError(CryptoQuotesError):
    code = "external_service_error"
    status_code = 503
