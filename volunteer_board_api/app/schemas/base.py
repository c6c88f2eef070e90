"""
Shared base model for API payloads.

Storage columns are snake_case while the JSON exchanged with clients is
camelCase (``spotsRemaining``, ``volunteerEmail``...).  Models derive
from ``ApiModel`` so the aliases are generated once, and either spelling
is accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
