from pydantic import BaseModel


def apply_patch(obj, data: BaseModel, required: tuple[str, ...] = (), exclude: set[str] | None = None) -> dict:
    """
    Copy the fields the client actually sent onto obj.
    An explicit null on a column listed in required is ignored.
    Returns the applied changes.
    """
    changes = data.model_dump(exclude_unset=True, exclude=exclude)
    applied = {}
    for field, value in changes.items():
        if value is None and field in required:
            continue
        setattr(obj, field, value)
        applied[field] = value
    return applied
