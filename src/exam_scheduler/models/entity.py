from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    """
    Base for every stored record. Snapshots use camelCase keys
    (`fullName`, `seatColors`); code uses the snake_case attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def as_json(self):
        return self.model_dump(mode="json", by_alias=True)
