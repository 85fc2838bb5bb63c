from __future__ import annotations
from slashkit.errors import PatternViolation, LengthViolation, LimitExceeded, DuplicateName, MissingField
from typing import TYPE_CHECKING, Any
import regex

if TYPE_CHECKING:
    from collections.abc import Iterable, Sized


__all__ = (
    'CHOICE_NAME_LENGTH',
    'CHOICE_VALUE_MAX_LENGTH',
    'COMMAND_NAME_PATTERN',
    'DESCRIPTION_LENGTH',
    'MAX_CHOICES',
    'MAX_LENGTH_RANGE',
    'MAX_OPTIONS',
    'MIN_LENGTH_RANGE',
    'NAME_LENGTH',
    'SAFE_INTEGER',
    'check_count',
    'check_length',
    'check_name',
    'check_present',
    'check_unique',
)


COMMAND_NAME_PATTERN = regex.compile(
    r'^[-_\p{L}\p{N}\p{sc=Deva}\p{sc=Thai}]{1,32}$')

NAME_LENGTH = (1, 32)
DESCRIPTION_LENGTH = (1, 100)
CHOICE_NAME_LENGTH = (1, 100)
CHOICE_VALUE_MAX_LENGTH = 100
MIN_LENGTH_RANGE = (0, 6000)
MAX_LENGTH_RANGE = (1, 6000)
MAX_OPTIONS = 25
MAX_CHOICES = 25
SAFE_INTEGER = 2 ** 53


def check_present(path: str, value: Any) -> None:  # noqa: ANN401
    if value is None:
        raise MissingField(path, 'field is required')


def check_length(
    path: str,
    value: str,
    bounds: tuple[int, int]
) -> None:
    minimum, maximum = bounds

    if not minimum <= len(value) <= maximum:
        raise LengthViolation(
            path,
            f'must be {minimum}-{maximum} characters, got {len(value)}'
        )


def check_name(
    path: str,
    name: str,
    *,
    chat_input: bool = True
) -> None:
    check_length(path, name, NAME_LENGTH)

    if not chat_input:
        return

    if COMMAND_NAME_PATTERN.fullmatch(name) is None:
        raise PatternViolation(
            path, f'`{name}` contains characters discord does not allow')

    if name != name.lower():
        raise PatternViolation(path, f'`{name}` must be lowercase')


def check_count(
    path: str,
    items: Sized,
    maximum: int
) -> None:
    if len(items) > maximum:
        raise LimitExceeded(
            path, f'at most {maximum} allowed, got {len(items)}')


def check_unique(path: str, names: Iterable[str]) -> None:
    seen: set[str] = set()

    for index, name in enumerate(names):
        if name in seen:
            raise DuplicateName(
                f'{path}[{index}].name',
                f'`{name}` is already used by a sibling'
            )

        seen.add(name)
