from __future__ import annotations

from typing import Any


__all__ = (
    'AuthFailure',
    'BaseSlashkitException',
    'BuilderConsumed',
    'ConflictingOptions',
    'DuplicateName',
    'HTTPException',
    'IncompatibleField',
    'InvalidSignature',
    'LengthViolation',
    'LimitExceeded',
    'MalformedPayload',
    'MissingField',
    'NetworkFailure',
    'OrderingViolation',
    'PatternViolation',
    'RangeViolation',
    'RateLimited',
    'RemoteRejection',
    'ServerError',
    'TransportError',
    'TypeMismatch',
    'ValidationError',
    'WrongVariant',
)


class BaseSlashkitException(Exception):
    def __init__(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
        super().__init__(*args, **kwargs)


# ? local validation


class ValidationError(BaseSlashkitException):
    """raised by builders and validators, `path` points at the offending field"""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f'{path}: {message}')


class MissingField(ValidationError):
    ...


class LengthViolation(ValidationError):
    ...


class PatternViolation(ValidationError):
    ...


class IncompatibleField(ValidationError):
    ...


class TypeMismatch(ValidationError):
    ...


class RangeViolation(ValidationError):
    ...


class ConflictingOptions(ValidationError):
    ...


class OrderingViolation(ValidationError):
    ...


class LimitExceeded(ValidationError):
    ...


class DuplicateName(ValidationError):
    ...


# ? model usage


class WrongVariant(BaseSlashkitException):
    ...


class BuilderConsumed(BaseSlashkitException):
    ...


class MalformedPayload(BaseSlashkitException):
    ...


class InvalidSignature(BaseSlashkitException):
    ...


# ? transport


class TransportError(BaseSlashkitException):
    ...


class NetworkFailure(TransportError):
    ...


class HTTPException(TransportError):
    status_code: int = 0

    def __init__(
        self,
        detail: Any | None = None,  # noqa: ANN401
        status_code: int | None = None
    ) -> None:
        self.detail = detail

        if status_code is not None:
            self.status_code = status_code

        super().__init__(detail)

    @property
    def code(self) -> int | None:
        """discord's json error code, if the body had one"""
        if isinstance(self.detail, dict):
            return self.detail.get('code')

        return None


class AuthFailure(HTTPException):
    status_code: int = 401


class RateLimited(HTTPException):
    status_code: int = 429

    @property
    def retry_after(self) -> float | None:
        if isinstance(self.detail, dict):
            return self.detail.get('retry_after')

        return None

    @property
    def is_global(self) -> bool:
        return (
            isinstance(self.detail, dict) and
            bool(self.detail.get('global', False))
        )


class RemoteRejection(HTTPException):
    status_code: int = 400


class ServerError(RemoteRejection):
    status_code: int = 500
