"""채팅 어댑터 (ChatAdapter)

Signature + StructuredMessage를 채팅 메시지로 변환하고,
모델 응답을 `[[ ## field ## ]]` 마커 기준으로 출력 필드에 매핑합니다.
"""

import re

from searchchat.errors import OutputParseError
from searchchat.models.messages import FieldSpec, Signature, StructuredMessage

from .base import Message

FIELD_HEADER = re.compile(r"\[\[ ## (\w+) ## \]\]")
COMPLETED_MARKER = "completed"


def _marker(name: str) -> str:
    return f"[[ ## {name} ## ]]"


class ChatAdapter:
    """필드 마커 기반 프롬프트 포맷터/파서"""

    def format(self, signature: Signature, inputs: StructuredMessage) -> list[Message]:
        """LLM 메시지 구성

        Args:
            signature: 입출력 스키마
            inputs: 입력 필드 값 (선언된 입력 필드가 모두 있어야 함)

        Returns:
            [system, user] Message 리스트
        """
        return [
            Message(role="system", content=self._system_prompt(signature)),
            Message(role="user", content=self._user_prompt(signature, inputs)),
        ]

    def parse(self, signature: Signature, text: str) -> StructuredMessage:
        """모델 응답을 출력 필드로 파싱

        필드 마커가 없고 출력 필드가 하나뿐이면 응답 전체(종료 마커 이전)를 그 필드 값으로 씁니다.

        Raises:
            OutputParseError: 선언된 출력 필드를 찾을 수 없음
        """
        wanted = signature.output_names
        sections = self._split_sections(text)

        if not sections and len(wanted) == 1:
            # 종료 마커와 그 뒤 텍스트는 값에서 제외
            value = text.split(_marker(COMPLETED_MARKER), 1)[0]
            return StructuredMessage.from_outputs(**{wanted[0]: value.strip()})

        missing = [name for name in wanted if name not in sections]
        if missing:
            raise OutputParseError(signature.name, missing, raw=text)

        return StructuredMessage.from_outputs(**{name: sections[name] for name in wanted})

    def _split_sections(self, text: str) -> dict[str, str]:
        sections: dict[str, str] = {}
        matches = list(FIELD_HEADER.finditer(text))
        for i, match in enumerate(matches):
            name = match.group(1)
            if name == COMPLETED_MARKER:
                continue
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            # 같은 필드가 반복되면 첫 번째 값 유지
            sections.setdefault(name, text[match.end():end].strip())
        return sections

    def _describe(self, fields: list[FieldSpec]) -> str:
        lines = []
        for i, field in enumerate(fields, start=1):
            desc = f": {field.description}" if field.description else ""
            lines.append(f"{i}. `{field.name}` (str){desc}")
        return "\n".join(lines)

    def _system_prompt(self, signature: Signature) -> str:
        layout = [f"{_marker(f.name)}\n{{{f.name}}}" for f in signature.fields]
        layout.append(_marker(COMPLETED_MARKER))

        parts = [
            "Your input fields are:",
            self._describe(signature.input_fields),
            "Your output fields are:",
            self._describe(signature.output_fields),
            "All interactions will be structured in the following way, "
            "with the appropriate values filled in.",
            "\n\n".join(layout),
        ]
        if signature.instructions:
            parts.append(
                "In adhering to this structure, your objective is: "
                f"{signature.instructions}"
            )
        return "\n\n".join(parts)

    def _user_prompt(self, signature: Signature, inputs: StructuredMessage) -> str:
        sections = [f"{_marker(name)}\n{inputs.get(name)}" for name in signature.input_names]

        requested = ", then ".join(f"`{_marker(name)}`" for name in signature.output_names)
        sections.append(
            f"Respond with the corresponding output fields, starting with {requested}, "
            f"and then ending with the marker for `{_marker(COMPLETED_MARKER)}`."
        )
        return "\n\n".join(sections)
