from .settings import AppSettings
from .retry import RetryPolicy
from .runtime import RuntimeDeps
from .pages import PageView, PageState
from .errors import ErrorKind, ClassifiedError
from .forms import SubmitStatus, SubmitOutcome
from .rate import RateCategory, RateDecision, RateLimitPolicy

__all__ = [
    "AppSettings",
    "ClassifiedError",
    "ErrorKind",
    "PageState",
    "PageView",
    "RateCategory",
    "RateDecision",
    "RateLimitPolicy",
    "RetryPolicy",
    "RuntimeDeps",
    "SubmitOutcome",
    "SubmitStatus",
]
