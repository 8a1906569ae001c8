"""
Tests for the command-line interface.
"""

import json
import pytest
from pathlib import Path
from dupecheck.cli import (
    CLIOrchestrator,
    ProgressDisplay,
    parse_arguments,
    parse_choice,
    print_outcome,
    print_outcome_json,
    handle_duplicate,
)
from dupecheck.cli import actions as actions_module
from dupecheck.cli.orchestrator import EXIT_OK, EXIT_SCAN_ERROR, EXIT_ACTION_ERROR
from dupecheck.models import FileRecord, DuplicatesFound, NoneFound, OnlySelfFound
from dupecheck.utils.platform import PlatformActionError


def _cli_args(workspace, *extra):
    return [str(workspace['target']), '-w', str(workspace['root']), '--no-progress', *extra]


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_arguments(['logo.png'])
        assert args.target == Path('logo.png')
        assert args.workspaces is None
        assert args.search_paths is None
        assert args.patterns is False
        assert args.workers is None
        assert args.open_index is None
        assert args.copy_index is None

    def test_repeatable_options(self):
        args = parse_arguments(['logo.png', '-w', '/a', '-w', '/b', '-s', 'x', '-s', 'y', '-x', 'png'])
        assert args.workspaces == [Path('/a'), Path('/b')]
        assert args.search_paths == ['x', 'y']
        assert args.extensions == ['png']

    def test_actions_mutually_exclusive(self):
        with pytest.raises(SystemExit):
            parse_arguments(['logo.png', '--open', '1', '--copy', '1'])

    def test_index_must_be_positive(self):
        with pytest.raises(SystemExit):
            parse_arguments(['logo.png', '--copy', '0'])

    def test_workers_must_be_positive(self):
        with pytest.raises(SystemExit):
            parse_arguments(['logo.png', '--workers', '0'])


class TestParseChoice:
    """Test parse_choice function."""

    def test_open(self):
        assert parse_choice('2', 3) == ('open', 1)

    def test_copy(self):
        assert parse_choice('c1', 3) == ('copy', 0)
        assert parse_choice('C 3', 3) == ('copy', 2)

    def test_quit(self):
        assert parse_choice('q', 3) == ('quit', -1)
        assert parse_choice('', 3) == ('quit', -1)

    def test_invalid(self):
        assert parse_choice('9', 3) is None
        assert parse_choice('0', 3) is None
        assert parse_choice('abc', 3) is None


class TestReporting:
    """Test outcome printing."""

    def test_nothing_found_messages(self, capsys):
        print_outcome(NoneFound(), "/ws/a.png")
        print_outcome(OnlySelfFound(), "/ws/a.png")
        out = capsys.readouterr().out
        assert "No duplicate images found." in out
        assert "No other duplicate images found." in out

    def test_duplicates_numbered(self, capsys):
        outcome = DuplicatesFound([
            FileRecord("/ws/b/one.png", "b/one.png", "f"),
            FileRecord("/ws/c/two.png", "c/two.png", "f"),
        ])
        print_outcome(outcome, "/ws/a.png", show_details=False)
        out = capsys.readouterr().out
        assert "[1] one.png" in out
        assert "[2] two.png" in out
        assert "2 duplicates found" in out

    def test_json(self):
        lines = []
        outcome = DuplicatesFound([FileRecord("/ws/b.png", "b.png", "f")])
        print_outcome_json(outcome, "/ws/a.png", write=lines.append)
        data = json.loads(lines[0])
        assert data['target'] == "/ws/a.png"
        assert data['kind'] == 'duplicates_found'
        assert data['duplicates'][0]['path'] == "/ws/b.png"

    def test_progress_display_counts_files(self):
        import logging
        display = ProgressDisplay(logging.getLogger("test"), enabled=False)
        display("Scanning image files...")
        display("scanned: a.png")
        display("scanned: b.png")
        display.close()
        assert display.scanned == 2


class TestHandleDuplicate:
    """Test open and copy actions."""

    def test_copy_uses_absolute_path(self, monkeypatch):
        copied = []
        monkeypatch.setattr(actions_module, "copy_to_clipboard", copied.append)
        record = FileRecord("/ws/b/one.png", "b/one.png", "f")
        assert handle_duplicate(record, 'copy')
        assert copied == ["/ws/b/one.png"]

    def test_open(self, monkeypatch):
        opened = []
        monkeypatch.setattr(actions_module, "open_file", opened.append)
        assert handle_duplicate(FileRecord("/ws/x.png", "x.png", "f"), 'open')
        assert opened == ["/ws/x.png"]

    def test_missing_file(self, monkeypatch):
        def missing(path):
            raise FileNotFoundError(path)

        monkeypatch.setattr(actions_module, "open_file", missing)
        assert not handle_duplicate(FileRecord("/ws/x.png", "x.png", "f"), 'open')

    def test_platform_failure(self, monkeypatch):
        def no_clipboard(text):
            raise PlatformActionError("No clipboard tool found")

        monkeypatch.setattr(actions_module, "copy_to_clipboard", no_clipboard)
        assert not handle_duplicate(FileRecord("/ws/x.png", "x.png", "f"), 'copy')

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            handle_duplicate(FileRecord("/ws/x.png", "x.png", "f"), 'delete')


class TestCLIOrchestrator:
    """End-to-end CLI runs."""

    def test_reports_duplicates(self, workspace, capsys):
        exit_code = CLIOrchestrator(_cli_args(workspace)).run()
        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "red_copy.png" in out
        assert "2 duplicates found" in out

    def test_json_output(self, workspace, capsys):
        exit_code = CLIOrchestrator(_cli_args(workspace, '--json')).run()
        data = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert data['kind'] == 'duplicates_found'
        assert [d['path'] for d in data['duplicates']] == [
            str(workspace['copy']),
            str(workspace['nested_copy']),
        ]

    def test_only_self_found(self, lonely_image, capsys):
        argv = [str(lonely_image['target']), '-w', str(lonely_image['root']), '--no-progress']
        assert CLIOrchestrator(argv).run() == EXIT_OK
        assert "No other duplicate images found." in capsys.readouterr().out

    def test_missing_target(self, workspace):
        argv = [str(workspace['root'] / "missing.png"), '-w', str(workspace['root']), '--no-progress']
        assert CLIOrchestrator(argv).run() == EXIT_SCAN_ERROR

    def test_not_an_image(self, workspace):
        argv = [str(workspace['text']), '-w', str(workspace['root']), '--no-progress']
        assert CLIOrchestrator(argv).run() == EXIT_SCAN_ERROR

    def test_search_path_option(self, workspace, capsys):
        exit_code = CLIOrchestrator(_cli_args(workspace, '-s', 'backup', '--json')).run()
        data = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert [d['path'] for d in data['duplicates']] == [str(workspace['copy'])]

    def test_default_workspace_is_cwd(self, workspace, monkeypatch, capsys):
        monkeypatch.chdir(workspace['root'])
        exit_code = CLIOrchestrator(['images/red.png', '--no-progress', '--json']).run()
        data = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert data['target'] == str(workspace['target'])
        assert len(data['duplicates']) == 2

    def test_copy_action(self, workspace, monkeypatch):
        copied = []
        monkeypatch.setattr(actions_module, "copy_to_clipboard", copied.append)
        assert CLIOrchestrator(_cli_args(workspace, '--copy', '2')).run() == EXIT_OK
        assert copied == [str(workspace['nested_copy'])]

    def test_action_index_out_of_range(self, workspace, monkeypatch):
        monkeypatch.setattr(actions_module, "open_file", lambda path: None)
        assert CLIOrchestrator(_cli_args(workspace, '--open', '5')).run() == EXIT_ACTION_ERROR

    def test_interactive_choice(self, workspace, monkeypatch):
        copied = []
        monkeypatch.setattr(actions_module, "copy_to_clipboard", copied.append)
        monkeypatch.setattr('builtins.input', lambda prompt='': 'c1')
        assert CLIOrchestrator(_cli_args(workspace, '-i')).run() == EXIT_OK
        assert copied == [str(workspace['copy'])]
