from rest_framework.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)


def validate_tags(value):
    """
    Validate a free-form tag list
    Tags must be strings; surrounding whitespace is trimmed and blanks dropped
    """
    if value in (None, ""):
        return []

    if not isinstance(value, list):
        raise ValidationError("Tags must be a list of strings")

    tags = []
    for tag in value:
        if not isinstance(tag, str):
            raise ValidationError("Tags must be a list of strings")
        tag = tag.strip()
        if tag:
            tags.append(tag)

    logger.debug(f"Tags validated: {tags}")
    return tags


def validate_choice_list(value, choices, label="value"):
    """
    Validate a list whose items must come from a closed set of choices
    Duplicates are removed while keeping the first occurrence
    """
    if not value:
        return []

    if not isinstance(value, list):
        raise ValidationError(f"Expected a list of {label}s")

    allowed = [choice for choice, _ in choices]
    invalid = [item for item in value if item not in allowed]
    if invalid:
        raise ValidationError(
            f"Invalid {label}: {', '.join(map(str, invalid))}. Must be one of: {', '.join(allowed)}"
        )

    return list(dict.fromkeys(value))
