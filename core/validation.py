from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError


def parse_body(schema, data):
    """Validate a request payload against ``schema`` or raise ``ValidationError``."""
    try:
        return schema.model_validate(data if data is not None else {})
    except PydanticValidationError as exc:
        details = [
            {"field": ".".join(str(part) for part in err["loc"]) or "body", "message": err["msg"]}
            for err in exc.errors()
        ]
        first = details[0]
        raise ValidationError(f"{first['field']}: {first['message']}", details=details) from exc
