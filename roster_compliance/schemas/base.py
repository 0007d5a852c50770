from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RosterModel(BaseModel):
    """Roster store payloads are camelCase; snake_case is accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
