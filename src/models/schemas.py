"""
Wire schemas for the answer service.
All models use Field() with descriptions documenting the remote contract.
"""

from typing import Any
from pydantic import BaseModel, Field, ConfigDict


class AnswerRequest(BaseModel):
    """
    JSON body sent to the answer service.
    """

    text: str = Field(description="Trimmed user question", min_length=1)
    limit: int = Field(
        default=10, description="Maximum number of medicine records to return", ge=1
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"text": "What is paracetamol used for?", "limit": 10}
        }
    )


class AnswerResponse(BaseModel):
    """
    Success body returned by the answer service.
    Items of `data` are validated one by one during normalization, so a
    malformed item does not reject the whole answer.
    """

    gemini_answer: str = Field(description="Natural-language answer, may contain '*' markup")
    data: list[Any] = Field(description="Ordered raw medicine objects")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "gemini_answer": "*Paracetamol* treats pain and fever.",
                "data": [
                    {
                        "medicine_name": "Crocin 650 Tablet",
                        "composition": "Paracetamol (650mg)",
                        "uses": "Pain relief, Treatment of Fever",
                        "sideeffects": "Nausea",
                        "image_url": "https://onemg.gumlet.io/crocin.jpg",
                        "manufacturer": "GlaxoSmithKline Pharmaceuticals Ltd",
                        "excellent_review_percentage": "48",
                        "average_review_percentage": "37",
                        "poor_review_percentage": "15",
                        "price": "33.6",
                        "packsizelabel": "strip of 15 tablets",
                        "type": "Tablet",
                    }
                ],
            }
        },
    )
