"""
Unit tests for small helpers in __main__.py:
- _report_issues: prints warnings/errors to stdout
- _env_flag: environment switches
"""

from stairval.notepad import create_notepad

from medbook.__main__ import _env_flag, _report_issues


def test_report_issues_outputs_both_blocks(capsys):
    """
    When notepad contains both warnings and errors, the helper should print both sections.
    """
    n = create_notepad("report")
    n.add_warning("warn 1")
    n.add_error("err 1")

    _report_issues(n)
    out = capsys.readouterr().out
    assert "Warnings found in script" in out
    assert "warn 1" in out
    assert "Errors found in script" in out
    assert "err 1" in out


def test_report_issues_silent_when_clean(capsys):
    _report_issues(create_notepad("report"))
    assert capsys.readouterr().out == ""


def test_env_flag(monkeypatch):
    for value in ["1", "true", "YES", " y "]:
        monkeypatch.setenv("MEDBOOK_TEST_FLAG", value)
        assert _env_flag("MEDBOOK_TEST_FLAG")
    for value in ["0", "no", ""]:
        monkeypatch.setenv("MEDBOOK_TEST_FLAG", value)
        assert not _env_flag("MEDBOOK_TEST_FLAG")
    monkeypatch.delenv("MEDBOOK_TEST_FLAG")
    assert not _env_flag("MEDBOOK_TEST_FLAG")


def test_report_issues_prints_messages_only(capsys):
    n = create_notepad("report")
    n.add_warning("visits.txt:2: skipped 'clear'")
    _report_issues(n)
    out = capsys.readouterr().out
    assert "- visits.txt:2: skipped 'clear'\n" in out
    assert "Issue(" not in out
