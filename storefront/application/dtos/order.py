"""Order request submitted from the order page and relayed by deep link."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrderRequest(BaseModel):
    """Customer and payment details for one order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    whatsapp: str = Field(..., min_length=1)
    description: str = ""
    promo_code: str = ""
    sender_name: str = ""
    sender_number: str = ""
    transaction_id: str = ""
