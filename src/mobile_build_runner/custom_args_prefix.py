import string

# Each rule is a tuple: (lambda predicate returning True on error, error_message)
# These rules assume `prefix` is already confirmed to be a non-empty string.
_PREFIX_VALIDATION_RULES = [
    (lambda p: any(c.isspace() for c in p), "custom args prefix cannot contain whitespace"),
    (lambda p: len(p) < 2, "custom args prefix must be at least 2 characters"),
    (
        lambda p: not all(c in string.printable for c in p),
        "custom args prefix must contain only printable characters",
    ),
    (lambda p: not p.startswith("-"), "custom args prefix must start with '-'"),
    (lambda p: not p.endswith(":"), "custom args prefix must end with ':'"),
]


def validate_custom_args_prefix(prefix: str) -> str | None:
    """Return error message if prefix is invalid, otherwise None."""
    if not isinstance(prefix, str) or not prefix:
        return "custom args prefix must be a non-empty string"

    for check, message in _PREFIX_VALIDATION_RULES:
        if check(prefix):  # type: ignore[no-untyped-call]
            return message

    return None


def validate_pair_separator(separator: str, prefix: str | None = None) -> str | None:
    """Return error message if the pair separator is unusable, otherwise None."""
    if not isinstance(separator, str) or len(separator) != 1:
        return "pair separator must be exactly one character"
    if separator == "=":
        return "pair separator cannot be '=' because it splits names from values"
    if separator.isspace():
        return "pair separator cannot be whitespace"
    if prefix and separator in prefix:
        return f"pair separator {separator!r} must not appear in the prefix {prefix!r}"
    return None
