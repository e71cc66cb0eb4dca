"""
Post-load assertions on loaded variables.

```python
dotenv = Dotenvx.create_mutable(".")
dotenv.load()
dotenv.required(["DB_HOST", "DB_PORT"]).not_empty()
dotenv.required("DB_PORT").is_integer()
dotenv.if_present("DEBUG").is_boolean()
```

Every assertion checks all listed variables and raises a single
`ValidationError` naming each failure.
"""

import re
from collections.abc import Callable, Iterable

from .exceptions import ValidationError
from .loading.repository import Repository

_BOOLEAN_VALUES = {"true", "false", "on", "off", "yes", "no", "1", "0", ""}


class Validator:
    """Assertions over a set of variable names.

    When `nullable` is True (the `if_present` flavour) undefined variables pass
    every assertion.
    """

    def __init__(self, repository: Repository, variables: Iterable[str], nullable: bool = False):
        self.repository = repository
        self.variables = list(variables)
        self.nullable = nullable

    def required(self) -> "Validator":
        """Assert that every variable is defined."""
        return self._assert(lambda value: value is not None, "is missing", check_missing=True)

    def not_empty(self) -> "Validator":
        """Assert that no variable is empty or whitespace."""
        return self._assert(lambda value: bool(value.strip()), "is empty")

    def is_integer(self) -> "Validator":
        return self._assert(
            lambda value: re.fullmatch(r"[-+]?\d+", value.strip()) is not None,
            "is not an integer",
        )

    def is_boolean(self) -> "Validator":
        return self._assert(
            lambda value: value.strip().lower() in _BOOLEAN_VALUES, "is not a boolean"
        )

    def allowed_values(self, choices: Iterable[str]) -> "Validator":
        allowed = list(choices)
        return self._assert(
            lambda value: value in allowed, f"is not one of [{', '.join(allowed)}]"
        )

    def allowed_regex(self, pattern: str) -> "Validator":
        compiled = re.compile(pattern)
        return self._assert(
            lambda value: compiled.fullmatch(value) is not None, f'does not match "{pattern}"'
        )

    def _assert(
        self,
        check: Callable[[str], bool] | Callable[[str | None], bool],
        message: str,
        check_missing: bool = False,
    ) -> "Validator":
        failures = []
        for name in self.variables:
            value = self.repository.get(name)
            if value is None and not check_missing:
                if self.nullable:
                    continue
                failures.append(f"{name} is missing")
                continue
            if not check(value):  # type: ignore[arg-type]
                failures.append(f"{name} {message}")

        if failures:
            raise ValidationError(
                f"One or more environment variables failed assertions: {', '.join(failures)}."
            )
        return self
