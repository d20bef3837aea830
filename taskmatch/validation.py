"""Input validation — record fields for the task catalog and worker directory."""

from taskmatch.exceptions import DataError

AVAILABILITY_VALUES = ("Available", "Busy")


def require_text(record: dict, key: str, source: str) -> str:
    """Return record[key] as a stripped non-empty string, or raise DataError."""
    value = record.get(key)
    if not isinstance(value, str) or not value.strip():
        raise DataError(
            source,
            f"field '{key}' must be a non-empty string (got {value!r})",
            suggestion=f"Set '{key}' on every record.",
        )
    return value.strip()


def require_int(record: dict, key: str, source: str,
                minimum: int | None = None, maximum: int | None = None) -> int:
    """Return record[key] as an int within [minimum, maximum], or raise DataError."""
    value = record.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataError(source, f"field '{key}' must be an integer (got {value!r})")
    if minimum is not None and value < minimum:
        raise DataError(source, f"field '{key}' must be >= {minimum} (got {value})")
    if maximum is not None and value > maximum:
        raise DataError(source, f"field '{key}' must be <= {maximum} (got {value})")
    return value


def require_availability(record: dict, source: str) -> str:
    """Normalize availability to its canonical spelling, case-insensitively."""
    value = record.get("availability", "Available")
    if isinstance(value, str):
        for canonical in AVAILABILITY_VALUES:
            if value.strip().lower() == canonical.lower():
                return canonical
    raise DataError(
        source,
        f"field 'availability' must be one of {AVAILABILITY_VALUES} (got {value!r})",
    )


def require_labels(record: dict, key: str, source: str) -> tuple[str, ...]:
    """Return record[key] as a tuple of strings. Missing key yields an empty tuple."""
    value = record.get(key, [])
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise DataError(source, f"field '{key}' must be a list of strings (got {value!r})")
    return tuple(value)


def check_unique_ids(records: list[dict], source: str) -> None:
    """Raise DataError if two records share an id."""
    seen: set[str] = set()
    for record in records:
        record_id = record["id"]
        if record_id in seen:
            raise DataError(
                source,
                f"duplicate id '{record_id}'",
                suggestion="Give every record a unique id.",
            )
        seen.add(record_id)
