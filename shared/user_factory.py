"""
User and checkout-info factories for the storefront suite.

Users are immutable value objects. Named constructors return the
well-known storefront accounts; ``create_random_user`` uses Faker for
data-driven tests. Validation never raises: it returns a
``ValidationResult`` listing every violated constraint so tests can assert
on specific fields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum

from faker import Faker

from shared import test_data

logger = logging.getLogger(__name__)

fake = Faker()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserType(str, Enum):
    """Behaviour category of a storefront account."""

    STANDARD = "standard"
    LOCKED = "locked"
    PROBLEM = "problem"
    PERFORMANCE = "performance"
    ERROR = "error"


@dataclass(frozen=True)
class User:
    """Immutable storefront account used by login and checkout flows."""

    username: str
    password: str
    first_name: str
    last_name: str
    email: str
    user_type: UserType | str = UserType.STANDARD


@dataclass(frozen=True)
class CheckoutInfo:
    """Shipping details typed into the first checkout step."""

    first_name: str
    last_name: str
    postal_code: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a data-layer validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Named Constructors
# -----------------------------------------------------------------------------


def create_standard_user() -> User:
    return User(
        username=test_data.VALID_USERNAME,
        password=test_data.VALID_PASSWORD,
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        user_type=UserType.STANDARD,
    )


def create_locked_user() -> User:
    return User(
        username=test_data.LOCKED_USERNAME,
        password=test_data.VALID_PASSWORD,
        first_name="Locked",
        last_name="User",
        email="locked.user@example.com",
        user_type=UserType.LOCKED,
    )


def create_problem_user() -> User:
    return User(
        username=test_data.PROBLEM_USERNAME,
        password=test_data.VALID_PASSWORD,
        first_name="Problem",
        last_name="User",
        email="problem.user@example.com",
        user_type=UserType.PROBLEM,
    )


def create_performance_user() -> User:
    return User(
        username=test_data.PERFORMANCE_USERNAME,
        password=test_data.VALID_PASSWORD,
        first_name="Performance",
        last_name="User",
        email="performance.user@example.com",
        user_type=UserType.PERFORMANCE,
    )


def create_error_user() -> User:
    return User(
        username=test_data.ERROR_USERNAME,
        password=test_data.VALID_PASSWORD,
        first_name="Error",
        last_name="User",
        email="error.user@example.com",
        user_type=UserType.ERROR,
    )


def create_invalid_user() -> User:
    """A well-formed user whose credentials the storefront rejects."""
    return User(
        username=test_data.INVALID_USERNAME,
        password=test_data.INVALID_PASSWORD,
        first_name="Invalid",
        last_name="User",
        email="invalid.user@example.com",
        user_type=UserType.STANDARD,
    )


def create_random_user() -> User:
    """
    Create a syntactically valid user with random identity fields.

    The password is the shared storefront password; the username is
    unknown to the storefront, so logging in with it is rejected.
    """
    username = f"user_{fake.unique.lexify('??????').lower()}"
    return User(
        username=username,
        password=test_data.VALID_PASSWORD,
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        email=f"{username}@example.com",
        user_type=UserType.STANDARD,
    )


def create_multiple_users(count: int) -> list[User]:
    return [create_random_user() for _ in range(count)]


_CONSTRUCTORS = {
    UserType.STANDARD: create_standard_user,
    UserType.LOCKED: create_locked_user,
    UserType.PROBLEM: create_problem_user,
    UserType.PERFORMANCE: create_performance_user,
    UserType.ERROR: create_error_user,
}


def create_user_by_type(user_type: UserType | str, strict: bool = False) -> User:
    """
    Create the well-known user for a category.

    Args:
        user_type: A ``UserType`` or its string value.
        strict: Raise on unknown categories instead of falling back.

    Returns:
        The matching user. Unknown categories return the standard user
        unless ``strict`` is set; the fallback is logged as a warning.

    Raises:
        ValueError: If ``strict`` is set and the category is unknown.
    """
    try:
        category = UserType(user_type)
    except ValueError:
        if strict:
            raise ValueError(f"Unknown user type: {user_type!r}") from None
        logger.warning("Unknown user type %r, falling back to standard user", user_type)
        return create_standard_user()
    return _CONSTRUCTORS[category]()


def get_all_user_types() -> list[UserType]:
    return list(UserType)


def get_user_by_username(username: str) -> User | None:
    """Return the well-known user with ``username``, or None."""
    for constructor in _CONSTRUCTORS.values():
        user = constructor()
        if user.username == username:
            return user
    return None


# -----------------------------------------------------------------------------
# Checkout Info
# -----------------------------------------------------------------------------


def create_checkout_info(**overrides: str) -> CheckoutInfo:
    """
    Build checkout info from the valid defaults.

    Example:
        create_checkout_info(first_name="") -> missing first name scenario
    """
    return replace(CheckoutInfo(**test_data.CHECKOUT_DATA["VALID"]), **overrides)


def create_random_checkout_info() -> CheckoutInfo:
    return CheckoutInfo(
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        postal_code=fake.numerify("#####"),
    )


def expected_checkout_error(info: CheckoutInfo) -> str | None:
    """
    The single error the storefront shows for ``info``.

    First name is checked before last name, which is checked before the
    postal code. Returns None when every field is filled.
    """
    if not info.first_name:
        return test_data.ERROR_MESSAGES["MISSING_FIRST_NAME"]
    if not info.last_name:
        return test_data.ERROR_MESSAGES["MISSING_LAST_NAME"]
    if not info.postal_code:
        return test_data.ERROR_MESSAGES["MISSING_POSTAL_CODE"]
    return None


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def validate_user(user: User) -> ValidationResult:
    """
    Check every field constraint of ``user``.

    Returns:
        ValidationResult with one error per violated field, in field order.
    """
    errors: list[str] = []

    if _is_blank(user.username):
        errors.append("Username is required")
    if _is_blank(user.password):
        errors.append("Password is required")
    if _is_blank(user.first_name):
        errors.append("First name is required")
    if _is_blank(user.last_name):
        errors.append("Last name is required")
    if not isinstance(user.email, str) or not EMAIL_PATTERN.match(user.email):
        errors.append("Valid email is required")
    if user.user_type not in {member.value for member in UserType}:
        errors.append("Invalid user type")

    return ValidationResult(valid=not errors, errors=errors)


def validate_checkout_info(info: CheckoutInfo) -> ValidationResult:
    """Check that every checkout field is filled, reporting all gaps."""
    errors: list[str] = []

    if _is_blank(info.first_name):
        errors.append("First name is required")
    if _is_blank(info.last_name):
        errors.append("Last name is required")
    if _is_blank(info.postal_code):
        errors.append("Postal code is required")

    return ValidationResult(valid=not errors, errors=errors)
