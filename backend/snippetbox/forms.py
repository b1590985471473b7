"""
Snippetbox Backend — Form Validation
=====================================

What:  Holds submitted form values and the validation messages produced
       while checking them.
How:   Handlers build a `Form` from `await request.form()`, call the
       validators they need, check `form.valid`, and pass the form to the
       template so it can re-display values and the first error per field.
When:  Created per request and discarded once the response is rendered.
"""

import re
from collections import defaultdict
from typing import Dict, Iterator, List, Mapping, Optional, Pattern, Tuple, Union

from email_validator import EmailNotValidError, validate_email

# Key for errors that belong to the whole form rather than one field
GENERIC_ERROR = "generic"


class FormErrors:
    """Field name → ordered list of validation messages."""

    def __init__(self) -> None:
        self._errors: Dict[str, List[str]] = defaultdict(list)

    def add(self, field: str, message: str) -> None:
        self._errors[field].append(message)

    def get(self, field: str) -> str:
        """First message recorded for `field`, or an empty string."""
        messages = self._errors.get(field)
        if not messages:
            return ""
        return messages[0]

    def all(self, field: str) -> List[str]:
        return list(self._errors.get(field, []))

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        return iter((field, list(msgs)) for field, msgs in self._errors.items() if msgs)

    def __contains__(self, field: object) -> bool:
        return bool(self._errors.get(field))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return sum(1 for msgs in self._errors.values() if msgs)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"FormErrors({dict(self.items())!r})"


class Form:
    """
    Submitted values plus their validation errors.

    Example:
        form = Form(await request.form())
        form.required("email", "password")
        form.valid_email("email")
        if not form.valid:
            return render(request, "signup.page.html", {"form": form})
    """

    def __init__(self, data: Optional[Mapping[str, object]] = None):
        self.values: Dict[str, str] = {}
        for key, value in (data or {}).items():
            self.values[key] = value if isinstance(value, str) else ""
        self.errors = FormErrors()

    def get(self, field: str) -> str:
        return self.values.get(field, "")

    def required(self, *fields: str) -> None:
        for field in fields:
            if not self.get(field).strip():
                self.errors.add(field, "This field cannot be blank")

    def max_length(self, field: str, limit: int) -> None:
        value = self.get(field)
        if value and len(value) > limit:
            self.errors.add(field, f"This field is too long (maximum is {limit} characters)")

    def min_length(self, field: str, limit: int) -> None:
        value = self.get(field)
        if value and len(value) < limit:
            self.errors.add(field, f"This field is too short (minimum is {limit} characters)")

    def max_bytes(self, field: str, limit: int) -> None:
        """Length check on the UTF-8 encoding; bcrypt only accepts 72 bytes."""
        value = self.get(field)
        if value and len(value.encode("utf-8")) > limit:
            self.errors.add(field, f"This field is too long (maximum is {limit} bytes)")

    def matches_pattern(self, field: str, pattern: Union[str, Pattern[str]]) -> None:
        value = self.get(field)
        if not value:
            return
        rx = re.compile(pattern) if isinstance(pattern, str) else pattern
        if not rx.fullmatch(value):
            self.errors.add(field, "This field is invalid")

    def valid_email(self, field: str) -> None:
        """
        Syntax check with email-validator (the library behind pydantic's EmailStr).

        The value is checked exactly as submitted: surrounding whitespace is
        invalid, not stripped.
        """
        value = self.get(field)
        if not value:
            return
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            self.errors.add(field, "This field is invalid")

    def permitted_values(self, field: str, *options: str) -> None:
        value = self.get(field)
        if value and value not in options:
            self.errors.add(field, "This field is invalid")

    @property
    def valid(self) -> bool:
        return not self.errors
