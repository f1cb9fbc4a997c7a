"""Small normalizers shared by the settings validators."""


def to_uppercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip().lower()
