# File: /fieldview/schemas/_base.py | Version: 1.0 | Title: Pydantic Base Schema (camelCase wire names)
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
