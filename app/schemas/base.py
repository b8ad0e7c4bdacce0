from pydantic import BaseModel, BeforeValidator
from pydantic.alias_generators import to_camel
from dateutil import parser
from datetime import date, datetime
from typing import Annotated, Any, Optional


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire"""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


def parse_optional_date(value: Any) -> Optional[date]:
    """Accept ISO dates or datetimes; empty string means unknown"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parser.isoparse(value).date()
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 date: {value!r}")
    return value


OptionalDate = Annotated[Optional[date], BeforeValidator(parse_optional_date)]
RequiredDate = Annotated[date, BeforeValidator(parse_optional_date)]
