"""Domain error codes for the discounts module."""

from dataclasses import dataclass
from enum import Enum

CODE_FIELD = "code"


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    USED = "USED"
    EXPIRED = "EXPIRED"
    EVENT_NOT_ALLOWED = "EVENT_NOT_ALLOWED"
    ALREADY_USED_BY_EMAIL = "ALREADY_USED_BY_EMAIL"
    TICKET_TYPE_NOT_ALLOWED = "TICKET_TYPE_NOT_ALLOWED"
    MEMBER_NOT_ALLOWED = "MEMBER_NOT_ALLOWED"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    DISCOUNTS_DISABLED = "DISCOUNTS_DISABLED"
    DUPLICATE_CODE = "DUPLICATE_CODE"
    CODE_GENERATION_FAILED = "CODE_GENERATION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code, user-safe message and offending field."""

    code: ErrorCode
    message: str
    field_name: str | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class DiscountValidationError(DomainError):
    """A coupon code was rejected by one of the validation checks."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(code=code, message=message, field_name=CODE_FIELD)


class DiscountNotFoundError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.NOT_FOUND, "The entered coupon is not found")


class DiscountUsedError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.USED, "The entered coupon is already used")


class DiscountExpiredError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EXPIRED, "The coupon is expired")


class EventNotAllowedError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EVENT_NOT_ALLOWED, "The coupon is not allowed on this event")


class AlreadyUsedByEmailError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.ALREADY_USED_BY_EMAIL, "The coupon is only usable once")


class TicketTypeNotAllowedError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(
            ErrorCode.TICKET_TYPE_NOT_ALLOWED,
            "The reservation is missing the product this coupon is allowed on",
        )


class MemberNotAllowedError(DiscountValidationError):
    def __init__(self) -> None:
        super().__init__(
            ErrorCode.MEMBER_NOT_ALLOWED,
            "None of the attendees is allowed to use this coupon",
        )


class ReservationNotFoundError(DomainError):
    """Raised when a reservation is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.RESERVATION_NOT_FOUND,
            message="Reservation not found",
        )


class DiscountsDisabledError(DomainError):
    """Raised when the reservation's event does not accept coupon codes."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DISCOUNTS_DISABLED,
            message="Coupon codes are disabled for this event",
            field_name=CODE_FIELD,
        )


class DuplicateCodeError(DomainError):
    """Raised by a store when a discount code is already taken."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_CODE,
            message="A discount with this code already exists",
            field_name=CODE_FIELD,
        )


class CodeGenerationError(DomainError):
    """Raised when no unique code could be generated."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CODE_GENERATION_FAILED,
            message="Could not generate a unique discount code",
            field_name=CODE_FIELD,
        )
