"""공용 데이터 모델"""

from .messages import (
    FieldDirection,
    FieldSpec,
    InputField,
    OutputField,
    Signature,
    StructuredMessage,
)

__all__ = [
    "FieldDirection",
    "FieldSpec",
    "InputField",
    "OutputField",
    "Signature",
    "StructuredMessage",
]
