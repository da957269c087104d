class EmptyInputError(ValueError):
    pass


def normalize(raw: str) -> str:
    text = (raw or "").strip().lower()
    if not text:
        raise EmptyInputError("empty command")
    return text
