from quiz_tutor.client.errors import ClassifiedError, ErrorKind, classify
from quiz_tutor.client.quiz_client import QuizClient
from quiz_tutor.client.resilience import RetryConfig, RetryingFetcher

__all__ = [
    "ClassifiedError",
    "ErrorKind",
    "QuizClient",
    "RetryConfig",
    "RetryingFetcher",
    "classify",
]
