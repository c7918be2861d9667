import subprocess

import pytest

from conftest import CLEAN_REPORT, FakeAnalyzer, make_project
from stylegate.cli import build_parser, main
from stylegate.core.config import settings
from stylegate.domain.schemas import XSLTSettings
from stylegate.services.checkstyle_service import CheckstyleService


@pytest.fixture
def service_factory(tmp_path, monkeypatch):
    calls = []

    def _install(analyzer):
        def factory(config_path=None):
            calls.append(config_path)
            return CheckstyleService(analyzer, make_project(tmp_path))

        monkeypatch.setattr("stylegate.cli.build_checkstyle_service", factory)
        return calls

    return _install


def test_parser_defaults_to_compile():
    args = build_parser().parse_args(["checkstyle"])
    assert args.context == "compile"
    assert args.config is None


def test_parser_rejects_unknown_context():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["checkstyle", "--context", "it"])


def test_checkstyle_never_fails_on_findings(service_factory, tmp_path):
    service_factory(FakeAnalyzer())
    assert main(["checkstyle", "--context", "test"]) == 0
    assert (tmp_path / "target" / "checkstyle-test-report.xml").exists()


def test_check_exit_codes(service_factory, capsys):
    service_factory(FakeAnalyzer())
    assert main(["checkstyle-check"]) == 1
    assert "3 issue(s) found in Checkstyle report" in capsys.readouterr().err


def test_check_passes_on_clean_report(service_factory, capsys):
    service_factory(FakeAnalyzer(CLEAN_REPORT))
    assert main(["checkstyle-check"]) == 0
    assert "PASSED" in capsys.readouterr().out


def test_config_file_is_forwarded(service_factory, tmp_path):
    calls = service_factory(FakeAnalyzer(CLEAN_REPORT))
    main(["checkstyle", "--config", str(tmp_path / "stylegate.json")])
    assert calls == [tmp_path / "stylegate.json"]


def test_infrastructure_error_exit_code(tmp_path, capsys, monkeypatch):
    # real wiring with an executable that cannot exist
    monkeypatch.setattr(settings, "CHECKSTYLE_CMD", "no-such-checkstyle-binary --quiet")
    (tmp_path / "stylegate.json").write_text('{"compile": {"config_file": "x.xml"}}', encoding="utf-8")
    rc = main(["checkstyle-check", "--config", str(tmp_path / "stylegate.json")])
    assert rc == 2
    assert "ERROR" in capsys.readouterr().err


def test_analyzer_timeout_exit_code(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(settings, "CHECKSTYLE_CMD", "checkstyle")
    monkeypatch.setattr("stylegate.core.util.shutil.which", lambda _: "/usr/bin/checkstyle")

    def fake_run_cmd(cmd, cwd, timeout_sec=None):
        raise subprocess.TimeoutExpired(cmd, 1)

    monkeypatch.setattr("stylegate.analyzers.checkstyle.run_cmd", fake_run_cmd)

    assert main(["checkstyle-check"]) == 2
    assert "did not finish within 1 seconds" in capsys.readouterr().err


def test_empty_xslt_output_on_clean_report(tmp_path, monkeypatch, per_error_xslt):
    out = tmp_path / "target" / "errors.txt"

    def factory(config_path=None):
        project = make_project(tmp_path, transformations=[XSLTSettings(xslt=per_error_xslt, output=out)])
        return CheckstyleService(FakeAnalyzer(CLEAN_REPORT), project)

    monkeypatch.setattr("stylegate.cli.build_checkstyle_service", factory)

    assert main(["checkstyle-check"]) == 0
    assert out.read_bytes() == b""
