"""
Tests for include extraction.

Asciidoctor itself is never run; subprocess.run is replaced so the
tests only exercise how its output and failures are handled.
"""
import logging
import os
import subprocess
from pathlib import Path

import pytest

from mdoc.constants import ASCIIDOCTOR_INCLUDES_SCRIPT
from mdoc.resolver import (
    AsciidoctorResolver,
    IncludeResolver,
    extract_includes,
    parse_include_output,
)


@pytest.fixture
def book(tmp_path):
    """A master document with a modules/ subdirectory."""
    (tmp_path / 'modules').mkdir()
    master = tmp_path / 'master.adoc'
    master.write_text('= Book\n\ninclude::modules/intro.adoc[]\n')
    return master.resolve()


def _completed(stdout='', returncode=0, stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseIncludeOutput:
    def test_appends_extension_relative_to_document(self, book):
        includes = parse_include_output('modules/intro\nmodules/setup\n', book)
        assert includes == [
            book.parent / 'modules' / 'intro.adoc',
            book.parent / 'modules' / 'setup.adoc',
        ]

    def test_empty_output(self, book):
        assert parse_include_output('', book) == []

    def test_blank_lines_ignored(self, book):
        assert parse_include_output('\n  \nintro\n\n', book) == [book.parent / 'intro.adoc']

    def test_duplicates_dropped_keeping_first(self, book):
        output = 'b\na\nb\n./a\n'
        assert parse_include_output(output, book) == [
            book.parent / 'b.adoc',
            book.parent / 'a.adoc',
        ]

    def test_parent_directory_is_normalized(self, book):
        nested = book.parent / 'modules' / 'assembly_x.adoc'
        nested.write_text('')
        assert parse_include_output('../shared/attrs', nested) == [
            book.parent / 'shared' / 'attrs.adoc'
        ]

    def test_symlinked_include_is_resolved(self, book):
        real = book.parent / 'modules' / 'real.adoc'
        real.write_text('')
        (book.parent / 'alias.adoc').symlink_to(real)
        assert parse_include_output('alias', book) == [real]


class TestAsciidoctorResolver:
    def test_satisfies_protocol(self):
        assert isinstance(AsciidoctorResolver(), IncludeResolver)

    def test_resolve_runs_ruby_with_script(self, book, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return _completed(stdout='modules/intro\n')

        monkeypatch.setattr(subprocess, 'run', fake_run)
        resolver = AsciidoctorResolver(ruby='ruby3', timeout=5)

        assert resolver.resolve(book) == [book.parent / 'modules' / 'intro.adoc']

        cmd, kwargs = calls[0]
        assert cmd == ['ruby3', '-e', ASCIIDOCTOR_INCLUDES_SCRIPT, str(book)]
        assert kwargs['timeout'] == 5
        assert kwargs['capture_output'] is True

    def test_script_loads_document_in_safe_mode(self):
        assert 'safe: :safe' in ASCIIDOCTOR_INCLUDES_SCRIPT
        assert 'load_file' in ASCIIDOCTOR_INCLUDES_SCRIPT
        assert 'catalog[:includes]' in ASCIIDOCTOR_INCLUDES_SCRIPT

    def test_parser_failure_yields_no_includes(self, book, monkeypatch):
        monkeypatch.setattr(
            subprocess, 'run',
            lambda cmd, **kw: _completed(stdout='partial\n', returncode=1, stderr='boom'),
        )
        assert AsciidoctorResolver().resolve(book) == []

    def test_missing_interpreter_yields_no_includes(self, book, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, 'run', fake_run)
        assert AsciidoctorResolver(ruby='no-such-ruby').resolve(book) == []

    def test_timeout_yields_no_includes(self, book, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs['timeout'])

        monkeypatch.setattr(subprocess, 'run', fake_run)
        assert AsciidoctorResolver(timeout=0.1).resolve(book) == []

    def test_failures_logged_at_debug(self, book, monkeypatch, caplog):
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs['timeout'])

        monkeypatch.setattr(subprocess, 'run', fake_run)
        caplog.set_level(logging.DEBUG, logger='mdoc')

        AsciidoctorResolver(timeout=0.1).resolve(book)
        AsciidoctorResolver(ruby=str(book.parent / 'no-such-ruby')).resolve(book)

        assert len(caplog.records) == 2
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    @pytest.mark.skipif(os.name != 'posix', reason="needs a shell script interpreter")
    def test_non_utf8_include_name(self, book, tmp_path):
        ruby = tmp_path / 'fake-ruby'
        ruby.write_bytes(b"#!/bin/sh\nprintf 'modules/caf\\351\\n'\n")
        ruby.chmod(0o755)

        includes = AsciidoctorResolver(ruby=str(ruby)).resolve(book)

        assert includes == [book.parent / 'modules' / os.fsdecode(b'caf\xe9.adoc')]

    def test_unavailable_without_interpreter(self, tmp_path, monkeypatch):
        monkeypatch.setenv('PATH', str(tmp_path / 'empty-bin'))
        assert AsciidoctorResolver().is_available() is False

    def test_unavailable_without_gem(self, monkeypatch):
        monkeypatch.setattr('mdoc.resolver.shutil.which', lambda name: '/usr/bin/' + name)
        monkeypatch.setattr(subprocess, 'run', lambda cmd, **kw: _completed(returncode=1))
        assert AsciidoctorResolver().is_available() is False

    def test_available_with_gem(self, monkeypatch):
        monkeypatch.setattr('mdoc.resolver.shutil.which', lambda name: '/usr/bin/' + name)
        monkeypatch.setattr(subprocess, 'run', lambda cmd, **kw: _completed())
        assert AsciidoctorResolver().is_available() is True


class TestExtractIncludes:
    def test_uses_given_resolver(self, book, make_resolver):
        intro = book.parent / 'modules' / 'intro.adoc'
        resolver = make_resolver({book: [intro]})

        assert extract_includes(str(book), resolver) == [intro]
        assert resolver.calls == [Path(book)]

    def test_defaults_to_asciidoctor(self, book, monkeypatch):
        monkeypatch.setattr(subprocess, 'run', lambda cmd, **kw: _completed(stdout='x\n'))
        assert extract_includes(book) == [book.parent / 'x.adoc']
