"""Map raised faults onto a fixed error taxonomy.

Rules are evaluated in order and the first match wins. Availability failures
come first because they are the ones worth retrying; permission and
configuration failures never heal on their own and are never retried.
"""

from __future__ import annotations

from collections.abc import Callable

from storefront.errors import RateLimitError, ConfigurationError
from storefront.state.errors import ErrorKind, ClassifiedError

Predicate = Callable[[BaseException, str | None, str], bool]

# PostgreSQL SQLSTATE values plus socket-level errno names.
CONNECTION_FAILURE_CODES = frozenset({
    "08000",  # connection_exception
    "08001",  # sqlclient_unable_to_establish_sqlconnection
    "08003",  # connection_does_not_exist
    "08004",  # sqlserver_rejected_establishment_of_sqlconnection
    "08006",  # connection_failure
    "57P01",  # admin_shutdown
    "53300",  # too_many_connections
    "ECONNREFUSED",
    "ECONNRESET",
})
QUERY_CANCELED_CODE = "57014"
INSUFFICIENT_PRIVILEGE_CODE = "42501"
UNDEFINED_TABLE_CODE = "42P01"
VALIDATION_CODES = frozenset({"22P02", "23514"})

CONNECTION_ERROR = ClassifiedError(
    kind=ErrorKind.CONNECTION_ERROR,
    retryable=True,
    http_status=503,
    user_message="Service temporarily unavailable.",
)
TIMEOUT_ERROR = ClassifiedError(
    kind=ErrorKind.TIMEOUT,
    retryable=True,
    http_status=503,
    user_message="The request took too long. The server may be overloaded.",
)
PERMISSION_ERROR = ClassifiedError(
    kind=ErrorKind.PERMISSION_ERROR,
    retryable=False,
    http_status=403,
    user_message="You do not have permission to access this page.",
)
CONFIG_ERROR = ClassifiedError(
    kind=ErrorKind.CONFIG_ERROR,
    retryable=False,
    http_status=500,
    user_message="System configuration error. Please contact the administrator.",
)
VALIDATION_ERROR = ClassifiedError(
    kind=ErrorKind.VALIDATION_ERROR,
    retryable=False,
    http_status=400,
    user_message="Data validation error. Please check your input.",
)
RATE_LIMITED_ERROR = ClassifiedError(
    kind=ErrorKind.RATE_LIMITED,
    retryable=False,
    http_status=429,
    user_message="Too many attempts. Please wait before trying again.",
)
EMAIL_SERVICE_ERROR = ClassifiedError(
    kind=ErrorKind.EMAIL_SERVICE_ERROR,
    retryable=True,
    http_status=503,
    user_message="Email service temporarily unavailable. Please try again later.",
)
MEDIA_LOAD_ERROR = ClassifiedError(
    kind=ErrorKind.MEDIA_LOAD_ERROR,
    retryable=True,
    http_status=503,
    user_message="Some media could not be loaded.",
)
NETWORK_ERROR = ClassifiedError(
    kind=ErrorKind.NETWORK_ERROR,
    retryable=True,
    http_status=503,
    user_message="Network problem. Please check your connection.",
)
UNKNOWN_ERROR = ClassifiedError(
    kind=ErrorKind.UNKNOWN,
    retryable=False,
    http_status=500,
    user_message="An unexpected error occurred.",
)


def fault_code(fault: BaseException) -> str | None:
    # asyncpg exposes SQLSTATE as `sqlstate`; other drivers and our own errors use `code`.
    for attr in ("sqlstate", "code"):
        value = getattr(fault, attr, None)
        if value is not None and value != "":
            return str(value)
    return None


def fault_message(fault: BaseException) -> str:
    return str(fault).lower()


def _mentions(*needles: str) -> Predicate:
    def predicate(_fault: BaseException, _code: str | None, message: str) -> bool:
        return any(needle in message for needle in needles)

    return predicate


def _is_connection(fault: BaseException, code: str | None, _message: str) -> bool:
    return code in CONNECTION_FAILURE_CODES or isinstance(fault, ConnectionError)


def _is_timeout(fault: BaseException, code: str | None, message: str) -> bool:
    if code == QUERY_CANCELED_CODE or isinstance(fault, TimeoutError):
        return True
    return "timeout" in message or "timed out" in message


def _is_permission(fault: BaseException, code: str | None, message: str) -> bool:
    if code == INSUFFICIENT_PRIVILEGE_CODE or isinstance(fault, PermissionError):
        return True
    return _mentions("permission", "unauthorized", "forbidden", "access denied")(fault, code, message)


def _is_config(fault: BaseException, code: str | None, message: str) -> bool:
    if code == UNDEFINED_TABLE_CODE or isinstance(fault, ConfigurationError):
        return True
    return _mentions("config", "environment", "variable", "missing")(fault, code, message)


def _is_validation(fault: BaseException, code: str | None, message: str) -> bool:
    if code in VALIDATION_CODES:
        return True
    return _mentions("validation", "invalid input")(fault, code, message)


def _is_rate_limited(fault: BaseException, code: str | None, message: str) -> bool:
    if isinstance(fault, RateLimitError):
        return True
    return _mentions("rate limit", "too many", "quota exceeded")(fault, code, message)


CLASSIFICATION_RULES: tuple[tuple[str, Predicate, ClassifiedError], ...] = (
    ("connection", _is_connection, CONNECTION_ERROR),
    ("timeout", _is_timeout, TIMEOUT_ERROR),
    ("permission", _is_permission, PERMISSION_ERROR),
    ("config", _is_config, CONFIG_ERROR),
    ("validation", _is_validation, VALIDATION_ERROR),
    ("rate_limited", _is_rate_limited, RATE_LIMITED_ERROR),
    ("email_service", _mentions("email", "resend", "smtp", "mail"), EMAIL_SERVICE_ERROR),
    ("media", _mentions("image", "video", "media", "asset", "cdn", "cloudinary"), MEDIA_LOAD_ERROR),
    ("network", _mentions("network", "fetch", "connection", "cors"), NETWORK_ERROR),
)


def classify(fault: BaseException | None) -> ClassifiedError:
    if fault is None:
        return UNKNOWN_ERROR

    code = fault_code(fault)
    message = fault_message(fault)
    for _name, predicate, classified in CLASSIFICATION_RULES:
        if predicate(fault, code, message):
            return classified
    return UNKNOWN_ERROR


__all__ = [
    "CLASSIFICATION_RULES",
    "CONNECTION_FAILURE_CODES",
    "classify",
    "fault_code",
    "fault_message",
]
