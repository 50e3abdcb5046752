"""구조화 예측 모델

Predictor와 ModelBinding 사이를 오가는 입출력 스키마(Signature)와
페이로드(StructuredMessage)를 정의하는 Pydantic 모델.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from searchchat.errors import SchemaViolation


# =============================================================================
# 스키마 (Signature)
# =============================================================================

class FieldDirection(str, Enum):
    """필드 방향"""

    INPUT = "input"
    OUTPUT = "output"


class FieldSpec(BaseModel):
    """스키마에 선언된 단일 텍스트 필드"""
    model_config = ConfigDict(frozen=True)

    name: str
    direction: FieldDirection
    description: str = ""


def InputField(name: str, description: str = "") -> FieldSpec:
    return FieldSpec(name=name, direction=FieldDirection.INPUT, description=description)


def OutputField(name: str, description: str = "") -> FieldSpec:
    return FieldSpec(name=name, direction=FieldDirection.OUTPUT, description=description)


class Signature(BaseModel):
    """이름 붙은 입출력 스키마

    instructions는 모델에게 전달되는 작업 목표 문장이고,
    fields는 선언 순서를 유지합니다.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    instructions: str = ""
    fields: Tuple[FieldSpec, ...] = Field(default_factory=tuple)

    @property
    def input_fields(self) -> List[FieldSpec]:
        return [f for f in self.fields if f.direction == FieldDirection.INPUT]

    @property
    def output_fields(self) -> List[FieldSpec]:
        return [f for f in self.fields if f.direction == FieldDirection.OUTPUT]

    @property
    def input_names(self) -> List[str]:
        return [f.name for f in self.input_fields]

    @property
    def output_names(self) -> List[str]:
        return [f.name for f in self.output_fields]


# =============================================================================
# 페이로드 (StructuredMessage)
# =============================================================================

class StructuredMessage(BaseModel):
    """필드명 → 텍스트 값의 순서 있는 매핑

    input_keys에 포함된 키는 입력 필드, 나머지는 출력 필드로 취급합니다.
    없는 필드 접근은 호출자 버그이므로 SchemaViolation을 발생시킵니다.
    """

    data: Dict[str, str] = Field(default_factory=dict, description="필드 값 (선언 순서 유지)")
    input_keys: Tuple[str, ...] = Field(default_factory=tuple, description="입력 필드 키")

    @classmethod
    def from_inputs(cls, **values: str) -> "StructuredMessage":
        return cls(data=dict(values), input_keys=tuple(values))

    @classmethod
    def from_outputs(cls, **values: str) -> "StructuredMessage":
        return cls(data=dict(values))

    def get(self, key: str) -> str:
        if key not in self.data:
            raise SchemaViolation(f"필드 없음: {key!r} (사용 가능: {list(self.data)})")
        return self.data[key]

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __len__(self) -> int:
        return len(self.data)

    def keys(self) -> List[str]:
        return list(self.data)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self.data.items())

    def inputs(self) -> "StructuredMessage":
        """입력 필드만 남긴 복사본"""
        data = {k: v for k, v in self.data.items() if k in self.input_keys}
        return StructuredMessage(data=data, input_keys=tuple(data))

    def outputs(self) -> "StructuredMessage":
        """출력 필드만 남긴 복사본"""
        data = {k: v for k, v in self.data.items() if k not in self.input_keys}
        return StructuredMessage(data=data)


__all__ = [
    'FieldDirection',
    'FieldSpec',
    'InputField',
    'OutputField',
    'Signature',
    'StructuredMessage',
]
