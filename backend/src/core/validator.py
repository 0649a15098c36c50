import re

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

# Letters (any script), spaces, apostrophes, hyphens and periods
FULL_NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:[ '.\-]+[^\W\d_]+)*\.?$")

# bcrypt ignores everything past 72 bytes
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72

MIN_FULL_NAME_LENGTH = 5
MAX_FULL_NAME_LENGTH = 55


class Validator:
    """Collects field errors for a single submitted record.

    Only the first failure per field is kept so a client sees one message
    for each offending field, but every offending field is reported.
    """

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, message)

    def check(self, ok: bool, field: str, message: str) -> None:
        if not ok:
            self.add_error(field, message)

    @staticmethod
    def required(value: str | None) -> bool:
        return bool(value and value.strip())

    @staticmethod
    def is_length(value: str | None, min_len: int, max_len: int) -> bool:
        length = len(value or "")
        return min_len <= length <= max_len

    @staticmethod
    def is_email(value: str | None) -> bool:
        return bool(value) and EMAIL_PATTERN.match(value) is not None

    @staticmethod
    def is_valid_password(value: str | None) -> bool:
        if not value or len(value) < MIN_PASSWORD_LENGTH:
            return False
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        has_letter = any(c.isalpha() for c in value)
        has_digit = any(c.isdigit() for c in value)
        return has_letter and has_digit

    @staticmethod
    def is_valid_full_name(value: str | None) -> bool:
        return bool(value) and FULL_NAME_PATTERN.match(value.strip()) is not None


def validate_signup(full_name: str, email: str, password: str) -> Validator:
    v = Validator()

    v.check(v.required(email), "email", "must be provided")
    v.check(v.is_email(email), "email", "must be a valid email address")

    v.check(v.required(password), "password", "must be provided")
    v.check(
        v.is_valid_password(password),
        "password",
        f"must be {MIN_PASSWORD_LENGTH} to {MAX_PASSWORD_BYTES} characters "
        "and contain at least one letter and one digit",
    )

    v.check(v.required(full_name), "full_name", "must be provided")
    v.check(
        v.is_length((full_name or "").strip(), MIN_FULL_NAME_LENGTH, MAX_FULL_NAME_LENGTH),
        "full_name",
        f"must be between {MIN_FULL_NAME_LENGTH} and {MAX_FULL_NAME_LENGTH} characters",
    )
    v.check(
        v.is_valid_full_name(full_name),
        "full_name",
        "may only contain letters, spaces, apostrophes, hyphens and periods",
    )
    return v
