"""searchchat 명령행 인터페이스

단발 질의(--message) 또는 대화형 루프로 오케스트레이터를 실행합니다.
검색은 MockSearchRetriever를 사용합니다.
"""

import argparse
import asyncio
import logging
import sys

from searchchat.errors import TurnError
from searchchat.services.orchestration import Orchestrator, build_orchestrator
from searchchat.services.retrieval import MockSearchRetriever
from searchchat.settings import settings, validate_settings

EXIT_COMMANDS = {"exit", "quit"}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="searchchat",
        description="의도분류 → 검색 → 응답생성 대화 파이프라인",
    )
    parser.add_argument(
        "--provider",
        choices=["openai", "anthropic", "dummy"],
        help="LLM 제공자 (기본: 설정값)",
    )
    parser.add_argument("--classifier-model", help="의도분류/검색어 추출 모델")
    parser.add_argument("--synthesis-model", help="응답 생성 모델")
    parser.add_argument("--message", "-m", help="단발 질의 (생략 시 대화형 모드)")
    parser.add_argument("--log-level", help="로그 레벨 (기본: 설정값)")
    return parser


async def _ask(orchestrator: Orchestrator, session_id: str, message: str) -> str:
    try:
        return await orchestrator.process_turn(session_id, message)
    except TurnError as e:
        return f"[오류] 응답을 생성하지 못했습니다: {e}"


async def run_interactive(orchestrator: Orchestrator) -> None:
    """표준입력 대화 루프 (exit/quit 또는 EOF로 종료)"""
    session_id = orchestrator.create_session()
    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            message = line.strip()
            if not message:
                continue
            if message.lower() in EXIT_COMMANDS:
                break
            print(f"Assistant: {await _ask(orchestrator, session_id, message)}", flush=True)
    finally:
        orchestrator.end_session(session_id)


async def run_once(orchestrator: Orchestrator, message: str) -> str:
    session_id = orchestrator.create_session()
    try:
        return await _ask(orchestrator, session_id, message)
    finally:
        orchestrator.end_session(session_id)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.provider:
        overrides["llm_provider"] = args.provider
    if args.classifier_model:
        overrides["classifier_model"] = args.classifier_model
    if args.synthesis_model:
        overrides["synthesis_model"] = args.synthesis_model
    if args.log_level:
        overrides["log_level"] = args.log_level
    config = settings.model_copy(update=overrides)

    configure_logging(config.log_level)
    for name, warning in validate_settings(config).items():
        logging.getLogger(__name__).warning(f"[설정:{name}] {warning}")

    orchestrator = build_orchestrator(MockSearchRetriever(), config)

    if args.message:
        print(asyncio.run(run_once(orchestrator, args.message)))
    else:
        print("searchchat 대화형 모드 (종료: exit)", flush=True)
        asyncio.run(run_interactive(orchestrator))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
