"""CLI 테스트 (dummy 제공자)"""

import io

from searchchat import cli


def test_single_message(capsys):
    exit_code = cli.main(["--provider", "dummy", "--message", "hello", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "더미 응답 모드" in out


def test_interactive_loop_until_exit(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("hello\n\nquit\nignored\n"))

    exit_code = cli.main(["--provider", "dummy", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.count("Assistant:") == 1


def test_parser_rejects_unknown_provider(capsys):
    parser = cli.build_parser()
    try:
        parser.parse_args(["--provider", "nope"])
    except SystemExit as e:
        assert e.code == 2
    else:
        raise AssertionError("unknown provider accepted")
