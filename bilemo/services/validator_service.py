"""
Validation of entity payloads into lists of human-readable messages.

Field constraints are declared on the pydantic request models; this service
turns their errors into localized sentences and adds the checks pydantic
cannot make on its own (uniqueness against the database).
"""

from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from bilemo.i18n import _


class ValidationFailedError(Exception):
    """
    Raised with the full list of violations when an entity is rejected.
    """

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


def _field_label(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else _("payload")


class ValidatorService:
    """
    Collects constraint violations for an entity about to be persisted.
    """

    def format_error(self, error: Dict[str, Any]) -> str:
        """Translate one pydantic error dict into a sentence."""
        field = _field_label(error.get("loc", ()))
        error_type = error.get("type", "")
        ctx = error.get("ctx") or {}

        if error_type == "missing" or (
            error_type.endswith("_type") and error.get("input", "") is None
        ):
            return _("%(field)s: this value should not be blank.") % {"field": field}
        if error_type == "string_too_short":
            limit = ctx.get("min_length", 1)
            if limit <= 1:
                return _("%(field)s: this value should not be blank.") % {
                    "field": field
                }
            return _("%(field)s must be at least %(limit)s characters long.") % {
                "field": field,
                "limit": limit,
            }
        if error_type == "string_too_long":
            return _("%(field)s cannot be longer than %(limit)s characters.") % {
                "field": field,
                "limit": ctx.get("max_length"),
            }
        if error_type == "value_error" and "email" in str(error.get("msg", "")).lower():
            return _("%(field)s: the email %(value)s is not valid.") % {
                "field": field,
                "value": error.get("input"),
            }
        return _("%(field)s: %(message)s") % {
            "field": field,
            "message": error.get("msg", ""),
        }

    def format_errors(self, errors: Iterable[Dict[str, Any]]) -> List[str]:
        """Translate a list of pydantic errors, keeping their order."""
        return [self.format_error(error) for error in errors]

    def check_validation(self, schema: Type[BaseModel], data: Dict[str, Any]) -> List[str]:
        """
        Validate data against a request model.  Returns an empty list when
        the data is valid.
        """
        try:
            schema.model_validate(data)
        except ValidationError as exc:
            return self.format_errors(exc.errors())
        return []

    def check_unique(
        self,
        db: Session,
        column,
        value: Any,
        message: str,
        exclude_id: Optional[int] = None,
    ) -> List[str]:
        """
        Return [message] when another row already holds value in column.
        """
        if value is None:
            return []
        model = column.class_
        query = db.query(model).filter(column == value)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if query.first() is not None:
            return [message]
        return []

    def validate_or_raise(self, messages: List[str]):
        """Raise ValidationFailedError if any message was collected."""
        if messages:
            raise ValidationFailedError(messages)


validator_service = ValidatorService()
