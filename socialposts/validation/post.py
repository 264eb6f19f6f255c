from typing import Any, Dict, Tuple

from .. import config


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return len(value.strip()) == 0
    if isinstance(value, (dict, list)):
        return len(value) == 0
    return False


def validate_post_input(data: Dict[str, Any]) -> Tuple[Dict[str, str], bool]:
    """
    Validate a raw post or comment body.

    Returns the field -> message mapping and an overall validity flag, so
    callers can send the mapping straight back as a 400 body.
    """
    errors: Dict[str, str] = {}
    data = data or {}

    text = data.get("text")
    if is_empty(text):
        errors["text"] = "Text field is required"
    elif not isinstance(text, str):
        errors["text"] = "Text must be a string"
    elif not config.POST_TEXT_MIN_LENGTH <= len(text) <= config.POST_TEXT_MAX_LENGTH:
        errors["text"] = (
            f"Post must be between {config.POST_TEXT_MIN_LENGTH} "
            f"and {config.POST_TEXT_MAX_LENGTH} characters"
        )

    name = data.get("name")
    if name is not None:
        if not isinstance(name, str):
            errors["name"] = "Name must be a string"
        elif len(name) > config.POST_NAME_MAX_LENGTH:
            errors["name"] = f"Name must be at most {config.POST_NAME_MAX_LENGTH} characters"

    avatar = data.get("avatar")
    if avatar is not None and not isinstance(avatar, str):
        errors["avatar"] = "Avatar must be a string"

    return errors, len(errors) == 0
