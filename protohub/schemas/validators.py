def reject_null(value):
    # Omit a field to leave it unchanged; null is only valid for nullable columns
    if value is None:
        raise ValueError("may not be null")
    return value
